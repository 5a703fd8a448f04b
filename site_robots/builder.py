# File: site_robots/builder.py
"""site_robots.builder: Декларативная сборка robots.txt и сериализация RuleSet в текст.

Пример:
```python
from site_robots.builder import RobotsBuilder, to_text

builder = (
    RobotsBuilder()
    .header("Robots.txt: Start")
    .group(["foobot"], lambda g: g.crawl_delay(5).allow("/example/yeah.txt").disallow("/example/nope.txt"))
    .group(["barbot", "nombot"], lambda g: g.disallow("/example/"))
    .sitemap("https://example.com/sitemap_1.xml")
    .footer("Robots.txt: End")
)
print(to_text(builder.build()).decode())
```
"""

from __future__ import annotations

import math
import re
from typing import Callable, Iterable, List, Optional, Union

from site_robots.models import Group, Rule
from site_robots.parser.groups import Block, merge_blocks
from site_robots.rules.ruleset import RuleSet
from site_robots.utils import validate_url

_UNSAFE_RE = re.compile(r'[^\x21-\x7e]|["<>#]')
_AGENT_FORBIDDEN = frozenset("#\r\n\x00")


def comment_lines(text: str) -> List[str]:
    """Splits free text into non-empty, trimmed lines.

    NUL ends a line for the parser, so it splits comment text here as well.
    """
    lines = text.replace("\x00", "\n").splitlines()
    return [line.strip() for line in lines if line.strip()]


def format_comment(line: str) -> str:
    return line if line.startswith("#") else f"# {line}"


def format_delay(seconds: float) -> str:
    return str(int(seconds)) if float(seconds).is_integer() else repr(float(seconds))


def _quote_unsafe(match: re.Match[str]) -> str:
    return "".join(f"%{byte:02X}" for byte in match.group(0).encode("utf-8"))


def clean_pattern(pattern: str) -> str:
    """Trims a pattern and percent-encodes characters that cannot appear in a rule line."""
    cleaned = _UNSAFE_RE.sub(_quote_unsafe, pattern.strip())
    if not cleaned:
        raise ValueError("pattern must not be empty")
    return cleaned


def clean_agent(agent: str) -> str:
    token = agent.strip()
    if not token or any(ch in _AGENT_FORBIDDEN for ch in token):
        raise ValueError(f"invalid user-agent token: {agent!r}")
    return token


class GroupBuilder:
    """Одна группа правил, привязанная к одному или нескольким агентам."""

    def __init__(self, agents: Iterable[str]) -> None:
        self.agents = [clean_agent(agent) for agent in agents]
        if not self.agents:
            raise ValueError("a group needs at least one user-agent")
        self.rules: List[Rule] = []
        self.delay: Optional[float] = None
        self.header_lines: List[str] = []
        self.footer_lines: List[str] = []

    def header(self, text: str) -> GroupBuilder:
        self.header_lines.extend(comment_lines(text))
        return self

    def allow(self, pattern: str) -> GroupBuilder:
        self.rules.append(Rule.from_text(clean_pattern(pattern), True))
        return self

    def disallow(self, pattern: str) -> GroupBuilder:
        self.rules.append(Rule.from_text(clean_pattern(pattern), False))
        return self

    def crawl_delay(self, seconds: float) -> GroupBuilder:
        seconds = float(seconds)
        if math.isnan(seconds) or math.isinf(seconds) or seconds < 0:
            raise ValueError(f"crawl-delay must be a finite non-negative number, got {seconds}")
        self.delay = seconds
        return self

    def footer(self, text: str) -> GroupBuilder:
        self.footer_lines.extend(comment_lines(text))
        return self

    def to_block(self) -> Block:
        block = Block(
            rules=list(self.rules),
            delays=[self.delay] if self.delay is not None else [],
            header=tuple(self.header_lines),
            footer=tuple(self.footer_lines),
        )
        for agent in self.agents:
            block.add_agent(agent)
        return block


class RobotsBuilder:
    """Fluent assembly of a robots.txt document.

    Entries keep call order; sitemap URLs are validated immediately and raise
    :class:`~site_robots.errors.InvalidUrl` from the call that supplied them.
    """

    def __init__(self) -> None:
        self.groups: List[GroupBuilder] = []
        self.sitemaps: List[str] = []
        self.header_lines: List[str] = []
        self.footer_lines: List[str] = []

    def header(self, text: str) -> RobotsBuilder:
        self.header_lines.extend(comment_lines(text))
        return self

    def add_group(self, agents: Union[str, Iterable[str]]) -> GroupBuilder:
        """Registers a new group and returns it for imperative use."""
        group = GroupBuilder([agents] if isinstance(agents, str) else agents)
        self.groups.append(group)
        return group

    def group(
        self,
        agents: Union[str, Iterable[str]],
        configure: Callable[[GroupBuilder], object],
    ) -> RobotsBuilder:
        configure(self.add_group(agents))
        return self

    def sitemap(self, url: str) -> RobotsBuilder:
        self.sitemaps.append(validate_url(url))
        return self

    def footer(self, text: str) -> RobotsBuilder:
        self.footer_lines.extend(comment_lines(text))
        return self

    def build(self, optimize: bool = False) -> RuleSet:
        rule_set = RuleSet(
            ordered_groups=merge_blocks([group.to_block() for group in self.groups]),
            sitemaps=tuple(self.sitemaps),
            header=tuple(self.header_lines),
            footer=tuple(self.footer_lines),
        )
        return rule_set.optimized() if optimize else rule_set

    def to_text(self) -> bytes:
        return to_text(self.build())

    def __str__(self) -> str:
        return self.to_text().decode("utf-8")


def escape_value(value: str) -> str:
    """Protects a literal ``#`` from being read back as a comment."""
    return value.replace("#", "\\#")


def _render_group(group: Group) -> List[str]:
    lines = [format_comment(line) for line in group.header]
    lines.extend(f"User-agent: {escape_value(agent)}" for agent in group.agents)
    lines.extend(f"{rule.directive}: {escape_value(rule.pattern.raw)}" for rule in group.rules)
    if group.crawl_delay is not None:
        lines.append(f"Crawl-delay: {format_delay(group.crawl_delay)}")
    if not group.rules and group.crawl_delay is None:
        # Closes the agent run so the next group does not absorb these agents.
        lines.append("Disallow:")
    lines.extend(format_comment(line) for line in group.footer)
    return lines


def to_text(rule_set: RuleSet) -> bytes:
    """Сериализует RuleSet в текст robots.txt (UTF-8).

    Re-parsing the output answers every query like *rule_set* does; the text
    itself is not guaranteed to match the original byte for byte.
    """
    sections: List[List[str]] = []
    if rule_set.header:
        sections.append([format_comment(line) for line in rule_set.header])
    if rule_set.always is False:
        sections.append(["User-agent: *", "Disallow: /"])
    else:
        sections.extend(_render_group(group) for group in rule_set.ordered_groups)
    if rule_set.footer:
        sections.append([format_comment(line) for line in rule_set.footer])
    if rule_set.sitemaps:
        sections.append([f"Sitemap: {escape_value(url)}" for url in rule_set.sitemaps])
    text = "\n\n".join("\n".join(section) for section in sections)
    return (text + "\n").encode("utf-8") if text else b""


__all__ = [
    "GroupBuilder",
    "RobotsBuilder",
    "clean_agent",
    "clean_pattern",
    "escape_value",
    "comment_lines",
    "format_comment",
    "format_delay",
    "to_text",
]

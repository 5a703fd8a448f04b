# File: site_robots/parser/groups.py
"""site_robots.parser.groups: Сборка потока директив в группы по user-agent.

Grouping is a two-state machine. Consecutive ``User-agent`` lines accumulate
into one block (*collecting agents*); the first Allow/Disallow/Crawl-delay line
switches to *collecting rules*, and only a ``User-agent`` seen in that state
opens a new block. Sitemap lines are document level and never touch the state.

Blocks naming the same agent are merged: every agent ends up with the rules of
all blocks it appears in, in document order. Agents that appear in exactly the
same blocks share one :class:`~site_robots.models.Group`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from site_robots.errors import InvalidUrl
from site_robots.logger import logger
from site_robots.models import Group, Rule
from site_robots.parser.lexer import Directive, DirectiveKind
from site_robots.utils import validate_url

#: Token of the fallback group.
ALL_AGENTS = "*"


def normalize_agent(agent: str) -> str:
    """Агенты сравниваются без учёта регистра и пробелов по краям."""
    return agent.strip().lower()


@dataclass
class Block:
    """One run of User-agent lines plus the rule lines that follow it."""

    agents: List[str] = field(default_factory=list)
    rules: List[Rule] = field(default_factory=list)
    delays: List[float] = field(default_factory=list)
    header: Tuple[str, ...] = ()
    footer: Tuple[str, ...] = ()

    def add_agent(self, agent: str) -> None:
        token = normalize_agent(agent)
        if token and token not in self.agents:
            self.agents.append(token)


class ResolvedGroups(NamedTuple):
    groups: Tuple[Group, ...]
    sitemaps: Tuple[str, ...]


class _State(Enum):
    COLLECTING_AGENTS = "agents"
    COLLECTING_RULES = "rules"


class GroupResolver:
    """Накапливает директивы и выдаёт группы и список sitemap."""

    def __init__(self) -> None:
        self.blocks: List[Block] = []
        self.sitemaps: List[str] = []
        self._state = _State.COLLECTING_RULES
        self._current: Optional[Block] = None

    def feed(self, directive: Directive) -> None:
        kind = directive.kind
        if kind is DirectiveKind.USER_AGENT:
            if self._current is None or self._state is _State.COLLECTING_RULES:
                self._current = Block()
                self.blocks.append(self._current)
            self._current.add_agent(str(directive.value))
            self._state = _State.COLLECTING_AGENTS
        elif kind.is_rule:
            if self._current is None:
                # Rules before the first User-agent line apply to everybody.
                self._current = Block(agents=[ALL_AGENTS])
                self.blocks.append(self._current)
            self._state = _State.COLLECTING_RULES
            self._add_rule(directive)
        elif kind is DirectiveKind.SITEMAP:
            self._add_sitemap(directive)

    def feed_all(self, directives: Iterable[Directive]) -> GroupResolver:
        for directive in directives:
            self.feed(directive)
        return self

    def _add_rule(self, directive: Directive) -> None:
        assert self._current is not None
        if directive.kind is DirectiveKind.CRAWL_DELAY:
            self._current.delays.append(float(directive.value))
        elif directive.value:
            allow = directive.kind is DirectiveKind.ALLOW
            self._current.rules.append(Rule.from_text(str(directive.value), allow))

    def _add_sitemap(self, directive: Directive) -> None:
        try:
            self.sitemaps.append(validate_url(str(directive.value)))
        except InvalidUrl as exc:
            logger.debug("Line %d: sitemap ignored, %s", directive.lineno, exc)

    def resolve(self) -> ResolvedGroups:
        return ResolvedGroups(merge_blocks(self.blocks), tuple(self.sitemaps))


def merge_blocks(blocks: List[Block]) -> Tuple[Group, ...]:
    """Сливает блоки так, чтобы каждому агенту соответствовала ровно одна группа."""
    membership: Dict[str, List[int]] = {}
    for index, block in enumerate(blocks):
        for agent in block.agents:
            membership.setdefault(agent, []).append(index)

    by_signature: Dict[Tuple[int, ...], List[str]] = {}
    for agent, indices in membership.items():
        by_signature.setdefault(tuple(indices), []).append(agent)

    groups: List[Group] = []
    decorated_blocks = set()
    for signature in sorted(by_signature, key=lambda sig: sig[0]):
        members = [blocks[i] for i in signature]
        rules = tuple(rule for block in members for rule in block.rules)
        delays = [delay for block in members for delay in block.delays]
        first = signature[0]
        header: Tuple[str, ...] = ()
        footer: Tuple[str, ...] = ()
        if first not in decorated_blocks:
            decorated_blocks.add(first)
            header, footer = blocks[first].header, blocks[first].footer
        groups.append(
            Group(
                agents=tuple(by_signature[signature]),
                rules=rules,
                crawl_delay=min(delays) if delays else None,
                header=header,
                footer=footer,
            )
        )
    return tuple(groups)


def resolve(directives: Iterable[Directive]) -> ResolvedGroups:
    """Группирует поток директив; никогда не бросает исключений."""
    return GroupResolver().feed_all(directives).resolve()


__all__ = [
    "ALL_AGENTS",
    "Block",
    "GroupResolver",
    "ResolvedGroups",
    "merge_blocks",
    "normalize_agent",
    "resolve",
]

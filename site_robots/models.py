# site_robots/models.py
"""
Data models shared by the resolver, the matching engine and the builder.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Iterable, NamedTuple, Optional, Tuple

from site_robots.rules.pattern import Pattern


class MatchDecision(NamedTuple):
    """Outcome of evaluating one group against one path."""

    allowed: bool
    matched_length: int


@dataclass(frozen=True, slots=True)
class Rule:
    """A single Allow/Disallow line of a group."""

    pattern: Pattern
    allow: bool

    @classmethod
    def from_text(cls, pattern: str, allow: bool) -> Rule:
        return cls(Pattern(pattern), allow)

    @property
    def directive(self) -> str:
        return "Allow" if self.allow else "Disallow"

    def __str__(self) -> str:
        return f"{self.directive}: {self.pattern.raw}"


@dataclass(frozen=True, slots=True)
class Group:
    """Rules shared by one or more user-agent tokens.

    ``agents`` keeps the lowercased tokens in the order they were first seen,
    ``rules`` keeps source order (used for serialization only).
    """

    agents: Tuple[str, ...]
    rules: Tuple[Rule, ...] = ()
    crawl_delay: Optional[float] = None
    header: Tuple[str, ...] = ()
    footer: Tuple[str, ...] = ()

    def decide(self, path: str) -> MatchDecision:
        """Longest match wins, equal lengths favour Allow, no match means allowed.

        *path* must already be normalized with :func:`site_robots.utils.normalize_path`.
        """
        allowed, best = True, 0
        for rule in self.rules:
            length = rule.pattern.match(path)
            if length is None:
                continue
            if length > best or (length == best and rule.allow):
                allowed, best = rule.allow, length
        return MatchDecision(allowed, best)

    def with_rules(self, rules: Iterable[Rule]) -> Group:
        return dataclasses.replace(self, rules=tuple(rules))


__all__ = ["MatchDecision", "Rule", "Group"]

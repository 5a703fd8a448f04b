# File: site_robots/rules/ruleset.py
"""site_robots.rules.ruleset: Неизменяемый набор правил и API проверок.

A :class:`RuleSet` is built once (by :func:`parse` or by the builder) and is
never mutated afterwards, so one instance can be shared between any number of
threads or tasks without locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import (
    AsyncIterable,
    Iterable,
    Mapping,
    Optional,
    Protocol,
    Tuple,
    Union,
    runtime_checkable,
)

from site_robots.logger import logger
from site_robots.models import Group, MatchDecision
from site_robots.parser.groups import ALL_AGENTS, normalize_agent, resolve
from site_robots.parser.lexer import Directive, tokenize
from site_robots.rules.optimizer import optimize as optimize_group
from site_robots.utils import normalize_path, relative_path

ROBOTS_PATH = "/robots.txt"

BytesLike = Union[bytes, bytearray, memoryview, str]


class AccessResult(str, Enum):
    """Итог попытки получить robots.txt (RFC 9309, раздел 2.3.1)."""

    SUCCESSFUL = "successful"
    REDIRECT = "redirect"
    UNAVAILABLE = "unavailable"
    UNREACHABLE = "unreachable"

    @classmethod
    def from_status(cls, status: int) -> AccessResult:
        """Maps an HTTP status code of the final robots.txt response.

        ``REDIRECT`` is for redirect chains the caller gave up on.
        """
        if 200 <= status < 300:
            return cls.SUCCESSFUL
        if 300 <= status < 400:
            return cls.REDIRECT
        if 400 <= status < 500:
            return cls.UNAVAILABLE
        return cls.UNREACHABLE


@dataclass(frozen=True)
class RuleSet:
    """Resolved groups plus the document-level sitemap list.

    ``ordered_groups`` holds each distinct group once, in first-seen order;
    ``groups`` maps every normalized agent token to its group.
    ``always`` short-circuits every query when set (see :meth:`always_allowed`).
    """

    ordered_groups: Tuple[Group, ...] = ()
    sitemaps: Tuple[str, ...] = ()
    header: Tuple[str, ...] = ()
    footer: Tuple[str, ...] = ()
    always: Optional[bool] = None
    _index: Mapping[str, Group] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index = {agent: group for group in self.ordered_groups for agent in group.agents}
        object.__setattr__(self, "_index", MappingProxyType(index))

    # ------------------------------------------------------------------ #
    # Construction                                                       #
    # ------------------------------------------------------------------ #

    @classmethod
    def from_directives(cls, directives: Iterable[Directive], optimize: bool = False) -> RuleSet:
        groups, sitemaps = resolve(directives)
        rule_set = cls(ordered_groups=groups, sitemaps=sitemaps)
        return rule_set.optimized() if optimize else rule_set

    @classmethod
    def parse(cls, data: BytesLike, optimize: bool = False) -> RuleSet:
        """Разбирает содержимое robots.txt; в худшем случае возвращает пустой набор."""
        rule_set = cls.from_directives(tokenize(data), optimize=optimize)
        logger.debug(
            "Parsed robots.txt: %d groups, %d sitemaps",
            len(rule_set.ordered_groups),
            len(rule_set.sitemaps),
        )
        return rule_set

    @classmethod
    def always_allowed(cls, allowed: bool) -> RuleSet:
        """A rule set that answers every query with *allowed*."""
        return cls(always=allowed)

    @classmethod
    def from_access(cls, access: AccessResult, body: BytesLike = b"", optimize: bool = False) -> RuleSet:
        """Builds the rule set mandated for a robots.txt retrieval outcome."""
        if access is AccessResult.SUCCESSFUL:
            return cls.parse(body, optimize=optimize)
        if access is AccessResult.UNREACHABLE:
            return cls.always_allowed(False)
        return cls.always_allowed(True)

    def optimized(self) -> RuleSet:
        """Returns a copy whose groups went through the rule optimizer."""
        return RuleSet(
            ordered_groups=tuple(optimize_group(group) for group in self.ordered_groups),
            sitemaps=self.sitemaps,
            header=self.header,
            footer=self.footer,
            always=self.always,
        )

    # ------------------------------------------------------------------ #
    # Queries                                                            #
    # ------------------------------------------------------------------ #

    @property
    def groups(self) -> Mapping[str, Group]:
        """Read-only mapping of normalized agent token to its group."""
        return self._index

    def group_for(self, agent: str) -> Optional[Group]:
        """Exact token match first, then the ``*`` group, otherwise None."""
        group = self._index.get(normalize_agent(agent))
        if group is None:
            group = self._index.get(ALL_AGENTS)
        return group

    def decide(self, agent: str, path: str) -> MatchDecision:
        normalized = normalize_path(path)
        if normalized == ROBOTS_PATH:
            return MatchDecision(True, 0)
        if self.always is not None:
            return MatchDecision(self.always, 0)
        group = self.group_for(agent)
        if group is None:
            return MatchDecision(True, 0)
        return group.decide(normalized)

    def is_allowed(self, agent: str, path: str) -> bool:
        """Проверяет, разрешён ли относительный путь (с query) для агента."""
        return self.decide(agent, path).allowed

    def is_url_allowed(self, agent: str, url: str) -> bool:
        """Same as :meth:`is_allowed` for an absolute URL; the host is ignored."""
        return self.is_allowed(agent, relative_path(url))

    def crawl_delay(self, agent: str) -> Optional[float]:
        """Crawl-delay in seconds of the group selected for *agent*."""
        group = self.group_for(agent)
        return group.crawl_delay if group is not None else None

    def rule_count(self, agent: str) -> Optional[int]:
        """Number of rules applied to *agent*; None when ``always`` is set."""
        if self.always is not None:
            return None
        group = self.group_for(agent)
        return len(group.rules) if group is not None else 0


@runtime_checkable
class AsyncReadable(Protocol):
    async def read(self) -> bytes: ...


def parse(data: BytesLike, optimize: bool = False) -> RuleSet:
    """Разбирает robots.txt. Never raises."""
    return RuleSet.parse(data, optimize=optimize)


async def aparse(
    source: Union[AsyncReadable, AsyncIterable[bytes]], optimize: bool = False
) -> RuleSet:
    """Дочитывает асинхронный источник байтов целиком и вызывает :func:`parse`.

    *source* is either an async iterable of chunks (``resp.content.iter_chunked(n)``
    in aiohttp) or an object with an async ``read()`` returning everything.
    """
    if isinstance(source, AsyncReadable):
        data = await source.read()
    else:
        chunks = []
        async for chunk in source:
            chunks.append(chunk)
        data = b"".join(chunks)
    return parse(data, optimize=optimize)


def is_allowed(rule_set: RuleSet, agent: str, path: str) -> bool:
    return rule_set.is_allowed(agent, path)


def crawl_delay(rule_set: RuleSet, agent: str) -> Optional[float]:
    return rule_set.crawl_delay(agent)


def sitemaps(rule_set: RuleSet) -> Tuple[str, ...]:
    return rule_set.sitemaps


__all__ = [
    "AccessResult",
    "AsyncReadable",
    "RuleSet",
    "aparse",
    "crawl_delay",
    "is_allowed",
    "parse",
    "sitemaps",
]

# File: site_robots/parser/lexer.py
"""site_robots.parser.lexer: Разбор сырых байтов robots.txt в поток директив.

The lexer is deliberately permissive: lines without a ``:``, lines without a
value and unparsable ``Crawl-delay`` values are dropped, unknown fields become
:attr:`DirectiveKind.UNKNOWN`. Nothing here ever raises on malformed input.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, Optional, Union

from site_robots.logger import logger


class DirectiveKind(str, Enum):
    """Every directive the lexer knows about."""

    USER_AGENT = "user-agent"
    ALLOW = "allow"
    DISALLOW = "disallow"
    CRAWL_DELAY = "crawl-delay"
    SITEMAP = "sitemap"
    UNKNOWN = "unknown"

    @property
    def is_rule(self) -> bool:
        """True for directives that close a run of ``User-agent`` lines."""
        return self in (DirectiveKind.ALLOW, DirectiveKind.DISALLOW, DirectiveKind.CRAWL_DELAY)


@dataclass(frozen=True, slots=True)
class Directive:
    """One parsed line. ``value`` is a float for crawl-delay, a string otherwise."""

    kind: DirectiveKind
    value: Union[str, float]
    lineno: int = 0


# Spellings seen in the wild, keyed by the lowercased, whitespace-collapsed field.
FIELD_ALIASES: Dict[str, DirectiveKind] = {
    "user-agent": DirectiveKind.USER_AGENT,
    "user agent": DirectiveKind.USER_AGENT,
    "useragent": DirectiveKind.USER_AGENT,
    "allow": DirectiveKind.ALLOW,
    "alow": DirectiveKind.ALLOW,
    "allaw": DirectiveKind.ALLOW,
    "disallow": DirectiveKind.DISALLOW,
    "dissallow": DirectiveKind.DISALLOW,
    "dissalow": DirectiveKind.DISALLOW,
    "disalow": DirectiveKind.DISALLOW,
    "diasllow": DirectiveKind.DISALLOW,
    "disallaw": DirectiveKind.DISALLOW,
    "crawl-delay": DirectiveKind.CRAWL_DELAY,
    "crawl delay": DirectiveKind.CRAWL_DELAY,
    "crawldelay": DirectiveKind.CRAWL_DELAY,
    "sitemap": DirectiveKind.SITEMAP,
    "site-map": DirectiveKind.SITEMAP,
    "site map": DirectiveKind.SITEMAP,
}

_LINE_SPLIT_RE = re.compile(r"\r\n|\n|\r")
_COMMENT_RE = re.compile(r"(?<!\\)#")
_SPACES_RE = re.compile(r"\s+")


def decode(data: Union[bytes, bytearray, memoryview, str]) -> str:
    """Декодирует вход как UTF-8 (с заменой битых байтов), убирает BOM и NUL."""
    if isinstance(data, str):
        text = data
    else:
        text = bytes(data).decode("utf-8", errors="replace")
    if text.startswith("\ufeff"):
        text = text[1:]
    return text.replace("\x00", "\n")


def parse_crawl_delay(value: str) -> Optional[float]:
    """Возвращает задержку в секундах или None, если значение нельзя использовать."""
    try:
        seconds = float(value)
    except ValueError:
        return None
    if math.isnan(seconds) or math.isinf(seconds) or seconds < 0:
        return None
    return seconds


def _strip_comment(line: str) -> str:
    match = _COMMENT_RE.search(line)
    if match is not None:
        line = line[: match.start()]
    return line.replace("\\#", "#")


def _lex_line(line: str, lineno: int) -> Optional[Directive]:
    line = _strip_comment(line).strip()
    if not line:
        return None

    field, sep, value = line.partition(":")
    if not sep:
        logger.debug("Line %d has no ':' separator, skipped", lineno)
        return None

    key = _SPACES_RE.sub(" ", field.strip().lower())
    value = value.strip()
    kind = FIELD_ALIASES.get(key, DirectiveKind.UNKNOWN)

    if not value:
        # An empty Allow/Disallow adds no rule but still ends a User-agent run.
        if kind in (DirectiveKind.ALLOW, DirectiveKind.DISALLOW):
            return Directive(kind, "", lineno)
        logger.debug("Line %d (%s) has no value, skipped", lineno, key)
        return None

    if kind is DirectiveKind.CRAWL_DELAY:
        seconds = parse_crawl_delay(value)
        if seconds is None:
            logger.debug("Line %d: unusable crawl-delay %r ignored", lineno, value)
            return None
        return Directive(kind, seconds, lineno)

    if kind is DirectiveKind.UNKNOWN:
        return Directive(kind, f"{key}:{value}", lineno)
    return Directive(kind, value, lineno)


def _lex(text: str) -> Iterator[Directive]:
    for lineno, line in enumerate(_LINE_SPLIT_RE.split(text), start=1):
        directive = _lex_line(line, lineno)
        if directive is not None:
            yield directive


class DirectiveStream:
    """Ленивая, перезапускаемая последовательность директив поверх буфера.

    Each call to :func:`iter` starts lexing from the beginning of the buffer.
    """

    __slots__ = ("_text",)

    def __init__(self, data: Union[bytes, bytearray, memoryview, str]) -> None:
        self._text = decode(data)

    def __iter__(self) -> Iterator[Directive]:
        return _lex(self._text)


def tokenize(data: Union[bytes, bytearray, memoryview, str]) -> DirectiveStream:
    """Возвращает поток директив для содержимого robots.txt."""
    return DirectiveStream(data)


__all__ = [
    "Directive",
    "DirectiveKind",
    "DirectiveStream",
    "FIELD_ALIASES",
    "decode",
    "parse_crawl_delay",
    "tokenize",
]

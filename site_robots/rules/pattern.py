# File: site_robots/rules/pattern.py
"""site_robots.rules.pattern: Компиляция и сопоставление шаблонов Allow/Disallow.

A pattern is a list of literal segments separated by ``*`` wildcards with an
optional trailing ``$`` anchor. Matching never backtracks: the first segment
must be a prefix of the path, every following segment is searched left to
right from the current cursor, and an anchored pattern only has to check that
its last segment is a suffix lying at or after the cursor.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from site_robots.utils import normalize_path

_STARS_RE = re.compile(r"\*+")


class Pattern:
    """Скомпилированный шаблон пути из robots.txt.

    ``length`` is the precedence weight: the number of characters of the
    pattern as written (at least 1), independent of percent-decoding.
    """

    __slots__ = ("raw", "anchored", "segments", "length")

    def __init__(self, raw: str) -> None:
        self.raw = raw
        self.anchored = raw.endswith("$")
        body = raw[:-1] if self.anchored else raw
        normalized = _STARS_RE.sub("*", normalize_path(body))
        self.segments: Tuple[str, ...] = tuple(normalized.split("*"))
        self.length = max(len(raw), 1)

    @property
    def has_wildcard(self) -> bool:
        return len(self.segments) > 1

    @property
    def is_universal(self) -> bool:
        """True when the pattern matches every path (``/``, ``*``, ``/*``...)."""
        return (
            not self.anchored
            and self.segments[0] == "/"
            and not any(self.segments[1:])
        )

    def match(self, path: str) -> Optional[int]:
        """Matches an already normalized path; returns ``length`` or None."""
        segments = self.segments
        head = segments[0]
        if not path.startswith(head):
            return None

        if len(segments) == 1:
            if self.anchored and len(path) != len(head):
                return None
            return self.length

        cursor = len(head)
        middle = segments[1:-1] if self.anchored else segments[1:]
        for segment in middle:
            if not segment:
                continue
            index = path.find(segment, cursor)
            if index < 0:
                return None
            cursor = index + len(segment)

        if self.anchored:
            tail = segments[-1]
            if len(path) - len(tail) < cursor or not path.endswith(tail):
                return None
        return self.length

    def matches(self, path: str) -> Optional[int]:
        """Normalizes *path* and matches it, see :meth:`match`."""
        return self.match(normalize_path(path))

    def covers(self, other: Pattern) -> bool:
        """Conservative check that every path matched by *other* is matched by self.

        False negatives are fine, false positives are not.
        """
        if self.is_universal:
            return True
        if self.segments == other.segments:
            return other.anchored or not self.anchored
        if not self.has_wildcard and not self.anchored:
            return other.segments[0].startswith(self.segments[0])
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return self.raw == other.raw

    def __hash__(self) -> int:
        return hash(self.raw)

    def __repr__(self) -> str:
        return f"Pattern({self.raw!r})"

    def __str__(self) -> str:
        return self.raw


__all__ = ["Pattern"]

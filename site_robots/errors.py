# File: site_robots/errors.py
"""site_robots.errors: Исключения, которые может поднять публичное API."""

from __future__ import annotations


class RobotsError(Exception):
    """Base class for every error raised by site_robots."""


class InvalidUrl(RobotsError, ValueError):
    """Raised when a URL-bearing value cannot be parsed as an absolute URL."""

    def __init__(self, url: str, reason: str = "not an absolute URL") -> None:
        super().__init__(f"invalid url {url!r}: {reason}")
        self.url = url
        self.reason = reason


__all__ = ["RobotsError", "InvalidUrl"]

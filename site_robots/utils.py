# File: site_robots/utils.py
"""site_robots.utils: Утилитарные функции для нормализации путей и работы с URL."""

from __future__ import annotations

import re
from typing import Sequence
from urllib.parse import urlsplit, urlunsplit

from pydantic import AnyUrl, TypeAdapter, ValidationError

from site_robots.errors import InvalidUrl
from site_robots.logger import logger

__all__: Sequence[str] = (
    "UNRESERVED",
    "normalize_path",
    "validate_url",
    "robots_url",
    "relative_path",
)

#: RFC 3986 unreserved characters; escapes of these octets are decoded.
UNRESERVED = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-._~")

_ESCAPE_RE = re.compile(r'%([0-9A-Fa-f]{2})|%|[^\x21-\x7e]|["<>#]')
_URL_ADAPTER: TypeAdapter[AnyUrl] = TypeAdapter(AnyUrl)


def _normalize_match(match: re.Match[str]) -> str:
    hex_pair = match.group(1)
    if hex_pair is not None:
        char = chr(int(hex_pair, 16))
        return char if char in UNRESERVED else "%" + hex_pair.upper()
    token = match.group(0)
    if token == "%":
        return "%25"
    return "".join(f"%{byte:02X}" for byte in token.encode("utf-8"))


def normalize_path(path: str) -> str:
    """Приводит путь (или шаблон) к канонической percent-encoded форме.

    Escapes of unreserved octets are decoded, every other escape is kept with
    upper-case hex digits, and spaces, controls, ``"<>#`` and non-ASCII
    characters are encoded as UTF-8. The result always starts with ``/``.

    >>> normalize_path("/%7Euser/café%2f")
    '/~user/caf%C3%A9%2F'
    """
    normalized = _ESCAPE_RE.sub(_normalize_match, path)
    if not normalized.startswith("/"):
        normalized = "/" + normalized
    return normalized


def validate_url(url: str) -> str:
    """Проверяет, что url является абсолютным URL, и возвращает его без пробелов по краям.

    Raises:
        InvalidUrl: если строку нельзя разобрать как абсолютный URL.
    """
    candidate = url.strip()
    if not candidate or any(ch.isspace() or not ch.isprintable() for ch in candidate):
        raise InvalidUrl(url, "empty or contains whitespace or control characters")
    try:
        _URL_ADAPTER.validate_python(candidate)
    except ValidationError as exc:
        raise InvalidUrl(url, exc.errors()[0]["msg"]) from exc
    return candidate


def robots_url(page_url: str) -> str:
    """Возвращает адрес robots.txt для страницы: ``scheme://host[:port]/robots.txt``.

    Credentials, path, query and fragment of *page_url* are dropped.

    Raises:
        InvalidUrl: для относительных URL и схем, отличных от http(s).
    """
    parts = urlsplit(page_url.strip())
    if parts.scheme not in ("http", "https"):
        raise InvalidUrl(page_url, f"scheme {parts.scheme!r}, expected 'http' or 'https'")
    host = parts.hostname
    if not host:
        raise InvalidUrl(page_url, "missing host")
    if ":" in host:
        host = f"[{host}]"
    try:
        port = parts.port
    except ValueError as exc:
        raise InvalidUrl(page_url, str(exc)) from exc
    netloc = f"{host}:{port}" if port is not None else host
    result = urlunsplit((parts.scheme, netloc, "/robots.txt", "", ""))
    logger.debug("robots.txt location: %s -> %s", page_url, result)
    return result


def relative_path(url: str) -> str:
    """Возвращает путь URL вместе с query и fragment, игнорируя схему и хост."""
    parts = urlsplit(url)
    path = parts.path or "/"
    if parts.query:
        path += "?" + parts.query
    if parts.fragment:
        path += "#" + parts.fragment
    return path

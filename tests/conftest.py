# File: tests/conftest.py
from pathlib import Path

import pytest

from site_robots.rules.ruleset import RuleSet, parse

CANONICAL = b"""
User-Agent: foobot
Disallow: *
Allow: /example/
Disallow: /example/nope.txt
Crawl-Delay: 5
Sitemap: https://example.com/sitemap_1.xml
"""

MULTI_AGENT = b"""\
# robots.txt for example.com
User-agent: *
Disallow: /private/
Allow: /private/public.html

User-agent: FooBot
User-agent: barbot
Disallow: /
Allow: /shared/
Sitemap: https://example.com/sitemap.xml
Crawl-delay: 2

User-agent: nombot
Disallow: /*.php$
"""


@pytest.fixture()
def canonical_bytes() -> bytes:
    """The example from the protocol docs: one group for foobot."""
    return CANONICAL


@pytest.fixture()
def canonical_rules() -> RuleSet:
    return parse(CANONICAL)


@pytest.fixture()
def multi_agent_bytes() -> bytes:
    return MULTI_AGENT


@pytest.fixture()
def multi_agent_rules() -> RuleSet:
    """Three groups, a shared agent block and a sitemap in the middle of a group."""
    return parse(MULTI_AGENT)


@pytest.fixture()
def robots_file(tmp_path) -> Path:
    """Write the canonical robots.txt to a temporary file."""
    path = tmp_path / "robots.txt"
    path.write_bytes(CANONICAL)
    return path

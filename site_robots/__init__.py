# site_robots/__init__.py
"""
SiteRobots package initializer.
Parsing, matching and building of robots.txt (RFC 9309) rule sets.
"""
__version__ = "0.1.0"

from site_robots.builder import GroupBuilder, RobotsBuilder, to_text
from site_robots.errors import InvalidUrl, RobotsError
from site_robots.models import Group, MatchDecision, Rule
from site_robots.rules.optimizer import optimize
from site_robots.rules.pattern import Pattern
from site_robots.rules.ruleset import (
    AccessResult,
    RuleSet,
    aparse,
    crawl_delay,
    is_allowed,
    parse,
    sitemaps,
)
from site_robots.utils import robots_url

__all__ = [
    "AccessResult",
    "Group",
    "GroupBuilder",
    "InvalidUrl",
    "MatchDecision",
    "Pattern",
    "RobotsBuilder",
    "RobotsError",
    "Rule",
    "RuleSet",
    "aparse",
    "crawl_delay",
    "is_allowed",
    "optimize",
    "parse",
    "robots_url",
    "sitemaps",
    "to_text",
]

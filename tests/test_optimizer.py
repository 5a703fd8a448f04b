# File: tests/test_optimizer.py
"""Тесты оптимизатора: сокращение правил без изменения решений."""
import itertools
import random

import pytest

from site_robots.models import Group, Rule
from site_robots.rules.optimizer import dominates, optimize, optimize_rules
from site_robots.utils import normalize_path


def rules_of(*entries):
    return tuple(Rule.from_text(pattern, allow) for allow, pattern in entries)


def raw(rules):
    return [(rule.allow, rule.pattern.raw) for rule in rules]


def test_exact_duplicates_keep_one_copy():
    rules = rules_of((False, "/a"), (False, "/b"), (False, "/a"))
    assert raw(optimize_rules(rules)) == [(False, "/b"), (False, "/a")]


def test_disallow_shadowed_by_equal_allow_is_dropped():
    rules = rules_of((False, "/a"), (True, "/a"), (False, "/z"))
    assert raw(optimize_rules(rules)) == [(True, "/a"), (False, "/z")]


def test_longer_disallow_is_kept():
    rules = rules_of((True, "/shop"), (False, "/shop/cart"))
    assert raw(optimize_rules(rules)) == raw(rules)


def test_encoded_twin_with_more_characters_wins():
    rules = rules_of((False, "/ab"), (False, "/a%62"), (True, "/x"))
    assert raw(optimize_rules(rules)) == [(False, "/a%62"), (True, "/x")]


def test_allow_only_group_collapses_to_nothing():
    assert optimize_rules(rules_of((True, "/"), (True, "/foo"))) == ()
    assert optimize_rules(()) == ()


def test_disallow_only_with_universal_collapses_to_one_rule():
    rules = rules_of((False, "/foo"), (False, "/*"), (False, "/bar$"), (False, "*"))
    assert raw(optimize_rules(rules)) == [(False, "*")]


def test_canonical_group_is_already_minimal(canonical_rules):
    group = canonical_rules.group_for("foobot")
    assert optimize(group) == group


def test_optimize_keeps_group_metadata():
    group = Group(
        agents=("a", "b"),
        rules=rules_of((True, "/x"), (False, "/x"), (False, "/")),
        crawl_delay=3.0,
        header=("note",),
    )
    optimized = optimize(group)
    assert optimized.agents == group.agents
    assert optimized.crawl_delay == 3.0
    assert optimized.header == ("note",)
    assert raw(optimized.rules) == [(True, "/x"), (False, "/")]


def test_dominates_requires_allow_compatibility():
    allow, disallow = Rule.from_text("/a", True), Rule.from_text("/a", False)
    assert dominates(allow, disallow)
    assert not dominates(disallow, allow)


# --------------------------------------------------------------------------- #
#                     Equivalence over generated corpora                      #
# --------------------------------------------------------------------------- #

PIECES = ["a", "b", "/", "*", ".", "%61", "ab", "$"]
PATH_ALPHABET = "ab/.$"
PATHS = ["/"] + [
    "/" + "".join(chars)
    for length in range(1, 5)
    for chars in itertools.product(PATH_ALPHABET, repeat=length)
]


def random_pattern(rng: random.Random) -> str:
    body = "".join(rng.choice(PIECES) for _ in range(rng.randint(0, 4)))
    if rng.random() < 0.3:
        body = "/" + body
    if rng.random() < 0.25:
        body += "$"
    return body or "*"


def random_rules(rng: random.Random):
    return tuple(
        Rule.from_text(random_pattern(rng), rng.random() < 0.5) for _ in range(rng.randint(0, 8))
    )


@pytest.mark.slow()
@pytest.mark.parametrize("seed", range(200))
def test_optimized_rules_decide_like_the_original(seed):
    rng = random.Random(seed)
    group = Group(agents=("*",), rules=random_rules(rng))
    optimized = optimize(group)
    assert len(optimized.rules) <= len(group.rules)
    for path in PATHS:
        normalized = normalize_path(path)
        assert optimized.decide(normalized).allowed == group.decide(normalized).allowed, (
            path,
            raw(group.rules),
            raw(optimized.rules),
        )

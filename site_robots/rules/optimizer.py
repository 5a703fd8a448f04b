# File: site_robots/rules/optimizer.py
"""site_robots.rules.optimizer: Статическое сокращение списка правил группы.

A rule R can be dropped when another surviving rule R' matches every path R
matches, is at least as long as R, and is an Allow whenever R is. On any path
where R would be among the longest matches, R' is among them too and keeps
the same outcome, so the decision never changes. Dominance is transitive, so
checking each rule against the current (already reduced) list is enough.
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from site_robots.logger import logger
from site_robots.models import Group, Rule


def dominates(winner: Rule, loser: Rule) -> bool:
    """True when *loser* can never decide a query that *winner* would not decide the same way."""
    if winner.pattern.length < loser.pattern.length:
        return False
    if loser.allow and not winner.allow:
        return False
    return winner.pattern.covers(loser.pattern)


def optimize_rules(rules: Sequence[Rule]) -> Tuple[Rule, ...]:
    """Возвращает эквивалентный (возможно более короткий) список правил."""
    if not any(not rule.allow for rule in rules):
        # Without a Disallow every query is allowed.
        return ()

    if not any(rule.allow for rule in rules):
        universal = [rule for rule in rules if rule.pattern.is_universal]
        if universal:
            return (min(universal, key=lambda rule: rule.pattern.length),)

    kept: List[Rule] = list(rules)
    index = 0
    while index < len(kept):
        candidate = kept[index]
        if any(
            other_index != index and dominates(other, candidate)
            for other_index, other in enumerate(kept)
        ):
            del kept[index]
        else:
            index += 1
    return tuple(kept)


def optimize(group: Group) -> Group:
    """Pure ``Group -> Group`` pass; the matching engine works with or without it."""
    rules = optimize_rules(group.rules)
    if len(rules) != len(group.rules):
        logger.debug(
            "Optimized group %s: %d -> %d rules", ",".join(group.agents), len(group.rules), len(rules)
        )
    return group.with_rules(rules)


__all__ = ["dominates", "optimize", "optimize_rules"]

"""One-shot analysis of a rule set.

``analyze`` runs the determined-variable and equivalence finders against
the same rule set and reports everything together with the number of
oracle decisions it spent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from pyentail.determined import get_determined_vars
from pyentail.equivalence import find_equal_vars, group_pairs
from pyentail.ruleset import RuleSet

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleSetAnalysis:
    """Structured result of ``analyze``.

    Attributes:
        highest_variable: Variables ``1..highest_variable`` were examined.
        determined: Determined literals, ascending by variable.
        equal_pairs: Equal variable pairs ``(i, j)``, ``i < j``, lexicographic.
        equivalence_classes: ``equal_pairs`` grouped into maximal classes.
        oracle_calls: Oracle decisions spent producing this analysis.
    """

    highest_variable: int
    determined: list[int] = field(default_factory=list)
    equal_pairs: list[tuple[int, int]] = field(default_factory=list)
    equivalence_classes: list[list[int]] = field(default_factory=list)
    oracle_calls: int = 0

    @property
    def undetermined(self) -> list[int]:
        """Variables with models on both sides, ascending."""
        pinned = {abs(lit) for lit in self.determined}
        return [v for v in range(1, self.highest_variable + 1) if v not in pinned]


def analyze(rule_set: RuleSet) -> RuleSetAnalysis:
    """Find determined literals and equivalence classes in one pass."""
    calls_before = rule_set.query_count
    determined = get_determined_vars(rule_set)
    pairs = find_equal_vars(rule_set, determined)
    result = RuleSetAnalysis(
        highest_variable=rule_set.highest_variable,
        determined=determined,
        equal_pairs=pairs,
        equivalence_classes=group_pairs(pairs),
        oracle_calls=rule_set.query_count - calls_before,
    )
    logger.info(
        "Analysis: %d determined, %d equal pairs, %d classes, %d oracle calls",
        len(result.determined),
        len(result.equal_pairs),
        len(result.equivalence_classes),
        result.oracle_calls,
    )
    return result

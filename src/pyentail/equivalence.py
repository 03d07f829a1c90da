"""Variables that always carry the same truth value.

Two undetermined variables ``i`` and ``j`` are equal when each is a hard
conclusion of the other. Every pair is checked on its own; nothing is
inferred through transitivity.

Determined variables are dropped before the pairwise scan. A variable
forced true is never a hard conclusion, but two variables forced false
pass both hard checks vacuously, and pinned variables are not
equivalence partners.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pyentail.conclusions import is_hard_conclusion
from pyentail.determined import get_determined_vars
from pyentail.ruleset import RuleSet

logger = logging.getLogger(__name__)


def find_equal_vars(
    rule_set: RuleSet, determined: Iterable[int] | None = None
) -> list[tuple[int, int]]:
    """Return every equal pair ``(i, j)``, ``i < j``, in lexicographic order.

    Args:
        rule_set: The rule set to inspect.
        determined: Output of ``get_determined_vars`` for this rule set, if
            the caller already has it. Computed when omitted.
    """
    if determined is None:
        determined = get_determined_vars(rule_set)
    pinned = {abs(lit) for lit in determined}
    candidates = [
        var for var in range(1, rule_set.highest_variable + 1) if var not in pinned
    ]

    pairs: list[tuple[int, int]] = []
    for index, i in enumerate(candidates):
        for j in candidates[index + 1:]:
            if is_hard_conclusion(i, j, rule_set) and is_hard_conclusion(j, i, rule_set):
                logger.debug("Variables %d and %d are equal", i, j)
                pairs.append((i, j))

    logger.info(
        "Found %d equal pairs among %d undetermined variables",
        len(pairs),
        len(candidates),
    )
    return pairs


def find_equivalence_classes(rule_set: RuleSet) -> list[list[int]]:
    """Group the equal pairs into maximal classes.

    Each class is sorted ascending and classes are ordered by their
    smallest member. Variables without a partner are left out.
    """
    return group_pairs(find_equal_vars(rule_set))


def group_pairs(pairs: Iterable[tuple[int, int]]) -> list[list[int]]:
    """Collapse lexicographically ordered equal pairs into classes."""
    root_of: dict[int, int] = {}
    classes: dict[int, list[int]] = {}
    for i, j in pairs:
        root = root_of.setdefault(i, i)
        if j not in root_of:
            root_of[j] = root
            classes.setdefault(root, [root]).append(j)
    return [classes[root] for root in sorted(classes)]

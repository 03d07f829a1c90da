"""Variables pinned to one truth value in every model."""

from __future__ import annotations

import logging

from pyentail.ruleset import RuleSet

logger = logging.getLogger(__name__)


def get_determined_vars(rule_set: RuleSet) -> list[int]:
    """Return the determined literals in ascending variable order.

    Variable ``v`` contributes ``v`` when no model has it false, ``-v``
    when no model has it true, and nothing otherwise. At most two oracle
    queries per variable.
    """
    determined: list[int] = []
    for var in range(1, rule_set.highest_variable + 1):
        if not rule_set.is_satisfiable_with(-var):
            determined.append(var)
        elif not rule_set.is_satisfiable_with(var):
            determined.append(-var)
        else:
            continue
        logger.debug("Variable %d determined: %d", var, determined[-1])

    logger.info(
        "Determined %d of %d variables", len(determined), rule_set.highest_variable
    )
    return determined

"""Entailment between two literals, phrased as oracle queries.

``premise`` logically entails ``conclusion`` when no model makes the
premise true and the conclusion false. A *hard* conclusion additionally
requires that the conclusion is not already forced by the rule set on its
own, which filters out entailments that hold only because the conclusion
variable is determined.
"""

from __future__ import annotations

import logging

from pyentail.ruleset import RuleSet

logger = logging.getLogger(__name__)


def is_logical_conclusion(premise: int, conclusion: int, rule_set: RuleSet) -> bool:
    """True iff every model with *premise* true also has *conclusion* true.

    Holds vacuously when *premise* is false in every model. One oracle query.
    """
    result = not rule_set.is_satisfiable_with([premise, -conclusion])
    logger.debug("Logical conclusion %d -> %d: %s", premise, conclusion, result)
    return result


def is_hard_conclusion(premise: int, conclusion: int, rule_set: RuleSet) -> bool:
    """True iff *premise* entails *conclusion* and *conclusion* can be false.

    The premise side is not filtered: a determined premise still counts.
    At most two oracle queries.
    """
    result = is_logical_conclusion(premise, conclusion, rule_set) and (
        rule_set.is_satisfiable_with(-conclusion)
    )
    logger.debug("Hard conclusion %d -> %d: %s", premise, conclusion, result)
    return result

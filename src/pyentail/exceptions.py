"""Errors raised by pyEntail.

Every public operation either answers or raises one of the two
``RuleSetError`` subclasses below. Malformed input (a zero literal, an
empty clause) is rejected earlier with ``ValueError``.
"""

from __future__ import annotations

from collections.abc import Sequence


class RuleSetError(Exception):
    """Base class for rule set failures."""


class ContradictionError(RuleSetError):
    """A mutation left the rule set without any model.

    The rule set is not rolled back: the solver may already hold the
    offending clause, so the instance must be discarded.

    Attributes:
        clause: The clause whose addition exposed the contradiction, or
            ``None`` when a whole batch was only found unsatisfiable as a
            conjunction.
    """

    def __init__(self, clause: Sequence[int] | None = None) -> None:
        self.clause = tuple(clause) if clause is not None else None
        if self.clause is None:
            message = "The rule set is unsatisfiable"
        else:
            message = f"Adding clause {list(self.clause)} makes the rule set unsatisfiable"
        super().__init__(message)


class SolverTimeoutError(RuleSetError, TimeoutError):
    """An oracle decision ran out of its time or conflict budget."""

    def __init__(self, assumptions: Sequence[int] = (), budget: str = "") -> None:
        self.assumptions = tuple(assumptions)
        detail = f" ({budget})" if budget else ""
        super().__init__(
            f"Solver gave up under assumptions {list(self.assumptions)}{detail}"
        )

"""RuleSet -- a growing CNF conjunction backed by a python-sat solver.

A ``RuleSet`` owns one incremental SAT solver holding every clause it has
accepted. Clauses are only ever added, never removed, and every accepted
state is satisfiable: a mutation that would leave the conjunction without
a model raises ``ContradictionError`` and marks the instance untrusted.

Queries never persist anything. Literal assumptions go through the
solver's assumption interface; extra clauses are checked on a short-lived
probe solver seeded with the permanent clauses.

Literals follow the DIMACS convention: variable ``v`` is ``v`` when true
and ``-v`` when false, ``0`` is not a literal.
"""

from __future__ import annotations

import logging
import operator
import threading
from collections.abc import Iterable, Sequence

from pysat.solvers import Solver

from pyentail.exceptions import ContradictionError, SolverTimeoutError

logger = logging.getLogger(__name__)

Clause = tuple[int, ...]
Model = list[int]

# MiniSat 2.2
DEFAULT_SOLVER = "m22"


def _validate_literal(lit: int, context: str) -> int:
    """Return *lit* as a plain int; raise ValueError if it is not a literal."""
    try:
        value = operator.index(lit)
    except TypeError:
        raise ValueError(f"{context}: {lit!r} is not an integer literal.") from None
    if value == 0:
        raise ValueError(f"{context}: 0 is not a literal. Use v or -v for variable v.")
    return value


def _validate_clause(clause: Iterable[int], context: str) -> Clause:
    """Raise ValueError if *clause* is empty or holds a non-literal."""
    literals = tuple(_validate_literal(lit, context) for lit in clause)
    if not literals:
        raise ValueError(f"{context}: a clause needs at least one literal.")
    return literals


def _as_literals(literals: int | Iterable[int], context: str) -> list[int]:
    """Accept a single literal or an iterable of literals (a conjunction)."""
    if isinstance(literals, int):
        literals = (literals,)
    return [_validate_literal(lit, context) for lit in literals]


class RuleSet:
    """A satisfiable conjunction of clauses that answers oracle queries.

    Args:
        clauses: Initial clauses, asserted in order. Each clause is a
            sequence of non-zero ints read as their disjunction.
        solver: python-sat backend name (default ``"m22"``).
        timeout: Seconds allowed for each oracle decision, or ``None``.
        conflict_budget: Conflicts allowed for each oracle decision, or
            ``None``.

    Raises:
        ContradictionError: if the initial clauses have no model.
        ValueError: on malformed clauses or non-positive budgets.

    Usage::

        with RuleSet([[1, 3], [2], [4, -1]]) as rules:
            rules.is_satisfiable_with(-2)   # False
            rules.get_model_with([2, -3])   # [1, 2, -3, 4]
    """

    def __init__(
        self,
        clauses: Iterable[Sequence[int]] | None = None,
        *,
        solver: str = DEFAULT_SOLVER,
        timeout: float | None = None,
        conflict_budget: int | None = None,
    ) -> None:
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout!r}.")
        if conflict_budget is not None and conflict_budget <= 0:
            raise ValueError(f"conflict_budget must be positive, got {conflict_budget!r}.")

        self._solver_name = solver
        self._timeout = timeout
        self._conflict_budget = conflict_budget
        self._clauses: list[Clause] = []
        self._highest_variable = 0
        self._query_count = 0
        self._trusted = True
        self._solver: Solver | None = Solver(name=solver)

        try:
            for clause in clauses or ():
                literals = _validate_clause(clause, "RuleSet")
                if not self._assert(literals):
                    self._reject(literals)
            if self._clauses and not self._decide(()):
                self._reject(None)
        except Exception:
            self.close()
            raise

        logger.debug(
            "RuleSet created: %d clauses, highest variable %d, solver %s",
            len(self._clauses),
            self._highest_variable,
            solver,
        )

    # --- Lifecycle ---

    def close(self) -> None:
        """Release the solver. Safe to call more than once."""
        if self._solver is not None:
            self._solver.delete()
            self._solver = None
            logger.debug("RuleSet closed")

    def __enter__(self) -> RuleSet:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"RuleSet({len(self._clauses)} clauses, "
            f"highest_variable={self._highest_variable}, solver={self._solver_name!r})"
        )

    # --- Read-only properties ---

    @property
    def clauses(self) -> tuple[Clause, ...]:
        """Accepted clauses in insertion order (read-only copy)."""
        return tuple(self._clauses)

    @property
    def highest_variable(self) -> int:
        """Largest variable id in any accepted clause, 0 when there is none."""
        return self._highest_variable

    @property
    def query_count(self) -> int:
        """Oracle decisions issued so far, including mutation checks."""
        return self._query_count

    @property
    def trusted(self) -> bool:
        """False once a mutation has raised ``ContradictionError``."""
        return self._trusted

    # --- Mutation ---

    def add_fact(self, literal: int) -> None:
        """Permanently assert *literal* as a unit clause."""
        self._add((_validate_literal(literal, "add_fact"),))
        logger.debug("Added fact: %d", literal)

    def add_clause(self, clause: Sequence[int]) -> None:
        """Permanently assert the disjunction of *clause*."""
        literals = _validate_clause(clause, "add_clause")
        self._add(literals)
        logger.debug("Added clause: %s", list(literals))

    def _add(self, literals: Clause) -> None:
        if not self._assert(literals) or not self._decide(()):
            self._reject(literals)

    def _assert(self, literals: Clause) -> bool:
        """Hand *literals* to the solver. False if the solver already sees a conflict."""
        self._clauses.append(literals)
        self._highest_variable = max(
            self._highest_variable, max(abs(lit) for lit in literals)
        )
        return self._handle().add_clause(literals, no_return=False)

    def _reject(self, clause: Clause | None) -> None:
        self._trusted = False
        logger.warning(
            "Contradiction: %s leaves the rule set without a model",
            f"clause {list(clause)}" if clause is not None else "the clause batch",
        )
        raise ContradictionError(clause)

    # --- Queries ---

    def is_satisfiable(self) -> bool:
        """True iff the rule set has at least one model."""
        return self._decide(())

    def is_satisfiable_with(self, literals: int | Iterable[int]) -> bool:
        """True iff the rule set has a model in which every given literal holds.

        *literals* is a single literal or an iterable read as a conjunction,
        e.g. ``[1, -2, 4]`` asks for a model with 1 and not 2 and 4.
        """
        return self._decide(_as_literals(literals, "is_satisfiable_with"))

    def is_satisfiable_under_clauses(self, clauses: Iterable[Sequence[int]]) -> bool:
        """True iff the rule set conjoined with *clauses* has a model."""
        extra = [_validate_clause(c, "is_satisfiable_under_clauses") for c in clauses]
        if not extra:
            return self.is_satisfiable()
        with Solver(name=self._solver_name, bootstrap_with=self._clauses + extra) as probe:
            return self._decide((), probe)

    def is_satisfiable_with_clause(self, clause: Sequence[int]) -> bool:
        """True iff the rule set has a model satisfying the disjunction *clause*."""
        return self.is_satisfiable_under_clauses([clause])

    def get_model(self) -> Model | None:
        """Return one model, or ``None`` if there is none.

        Position ``i - 1`` holds ``i`` if variable ``i`` is true and ``-i``
        otherwise; the list has exactly ``highest_variable`` entries.
        """
        return self._find_model([])

    def get_model_with(self, literals: int | Iterable[int]) -> Model | None:
        """Return one model in which every given literal holds, or ``None``."""
        return self._find_model(_as_literals(literals, "get_model_with"))

    def _find_model(self, assumptions: list[int]) -> Model | None:
        if not self._decide(assumptions):
            return None
        value = {abs(lit): lit for lit in self._handle().get_model() or ()}
        return [value.get(var, -var) for var in range(1, self._highest_variable + 1)]

    # --- Oracle access ---

    def _handle(self) -> Solver:
        if self._solver is None:
            raise ValueError("Operation on a closed RuleSet.")
        return self._solver

    def _decide(self, assumptions: Sequence[int], solver: Solver | None = None) -> bool:
        """Run one oracle decision under *assumptions*."""
        solver = solver if solver is not None else self._handle()
        self._query_count += 1
        if self._timeout is None and self._conflict_budget is None:
            status = solver.solve(assumptions=assumptions)
        else:
            status = self._solve_limited(solver, assumptions)
        logger.debug(
            "Oracle decision under %s: %s",
            list(assumptions),
            "SAT" if status else "UNSAT",
        )
        return bool(status)

    def _solve_limited(self, solver: Solver, assumptions: Sequence[int]) -> bool:
        """Budgeted decision; ``solve_limited`` answers None when it gives up."""
        if self._conflict_budget is not None:
            solver.conf_budget(self._conflict_budget)

        timer = None
        if self._timeout is not None:
            timer = threading.Timer(self._timeout, solver.interrupt)
            timer.start()
        try:
            status = solver.solve_limited(
                assumptions=assumptions, expect_interrupt=timer is not None
            )
        finally:
            if timer is not None:
                timer.cancel()
                timer.join()
                solver.clear_interrupt()

        if status is None:
            limits = []
            if self._timeout is not None:
                limits.append(f"timeout {self._timeout}s")
            if self._conflict_budget is not None:
                limits.append(f"{self._conflict_budget} conflicts")
            budget = ", ".join(limits)
            logger.warning("Oracle gave up under %s (%s)", list(assumptions), budget)
            raise SolverTimeoutError(assumptions, budget)
        return status

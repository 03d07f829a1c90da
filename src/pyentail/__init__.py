"""pyEntail -- entailment, determined variables and equivalences over CNF.

Turns semantic questions about a propositional rule set into SAT oracle
queries against python-sat.

Public API::

    from pyentail import RuleSet, ContradictionError, SolverTimeoutError
    from pyentail import (
        is_logical_conclusion, is_hard_conclusion,
        get_determined_vars, find_equal_vars, find_equivalence_classes,
        analyze, RuleSetAnalysis,
    )
"""

from pyentail._version import __version__
from pyentail.analysis import RuleSetAnalysis, analyze
from pyentail.conclusions import is_hard_conclusion, is_logical_conclusion
from pyentail.determined import get_determined_vars
from pyentail.equivalence import find_equal_vars, find_equivalence_classes
from pyentail.exceptions import ContradictionError, RuleSetError, SolverTimeoutError
from pyentail.ruleset import DEFAULT_SOLVER, Clause, Model, RuleSet

__all__ = [
    "DEFAULT_SOLVER",
    "Clause",
    "ContradictionError",
    "Model",
    "RuleSet",
    "RuleSetAnalysis",
    "RuleSetError",
    "SolverTimeoutError",
    "__version__",
    "analyze",
    "find_equal_vars",
    "find_equivalence_classes",
    "get_determined_vars",
    "is_hard_conclusion",
    "is_logical_conclusion",
]

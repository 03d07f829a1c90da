"""Property-based tests for pyEntail using Hypothesis.

Every answer the rule set, the conclusion checks and the finders give is
compared with brute-force truth-table enumeration over small random
CNFs. Five variables keep the tables at 32 rows.
"""

import itertools

import pytest
from hypothesis import assume, given, note, settings
from hypothesis import strategies as st

from pyentail import (
    ContradictionError,
    RuleSet,
    analyze,
    find_equal_vars,
    find_equivalence_classes,
    get_determined_vars,
    is_hard_conclusion,
    is_logical_conclusion,
)

MAX_VARS = 5

# ============================================================
# Strategies
# ============================================================


def literals(n_vars):
    return st.integers(min_value=1, max_value=n_vars).flatmap(
        lambda v: st.sampled_from([v, -v])
    )


@st.composite
def cnfs(draw):
    """Generate 1-8 clauses of 1-3 literals over at most MAX_VARS variables."""
    n_vars = draw(st.integers(min_value=1, max_value=MAX_VARS))
    return draw(st.lists(
        st.lists(literals(n_vars), min_size=1, max_size=3),
        min_size=1,
        max_size=8,
    ))


@st.composite
def satisfiable_cnfs(draw):
    clauses = draw(cnfs())
    assume(all_models(clauses))
    return clauses


# ============================================================
# Brute force
# ============================================================


def highest_variable(clauses):
    return max(abs(lit) for clause in clauses for lit in clause)


def all_models(clauses):
    """Every model of *clauses*, each laid out like RuleSet.get_model()."""
    n = highest_variable(clauses)
    models = []
    for bits in itertools.product((False, True), repeat=n):
        model = tuple(v if bits[v - 1] else -v for v in range(1, n + 1))
        if all(any(model[abs(lit) - 1] == lit for lit in clause) for clause in clauses):
            models.append(model)
    return models


def holds(model, lit):
    return model[abs(lit) - 1] == lit


def signed(n):
    return [lit for v in range(1, n + 1) for lit in (v, -v)]


# ============================================================
# Property 1: CONSTRUCTION
#
# A rule set is accepted exactly when its clauses have a model.
# ============================================================

@given(clauses=cnfs())
@settings(max_examples=200, deadline=None)
def test_construction_matches_satisfiability(clauses):
    """RuleSet(clauses) raises ContradictionError iff there is no model."""
    note(f"Clauses: {clauses}")
    if all_models(clauses):
        with RuleSet(clauses) as rs:
            assert rs.is_satisfiable()
            assert rs.highest_variable == highest_variable(clauses)
    else:
        with pytest.raises(ContradictionError):
            RuleSet(clauses)


# ============================================================
# Property 2: MODELS
#
# Returned models satisfy every clause and every assumption, and
# None comes back exactly when no model meets the assumptions.
# ============================================================

@given(data=st.data())
@settings(max_examples=200, deadline=None)
def test_models_are_models(data):
    clauses = data.draw(satisfiable_cnfs())
    models = all_models(clauses)
    n = highest_variable(clauses)
    assumptions = data.draw(st.lists(st.sampled_from(signed(n)), max_size=3))

    with RuleSet(clauses) as rs:
        model = rs.get_model()
        assert tuple(model) in models

        expected = [m for m in models if all(holds(m, lit) for lit in assumptions)]
        model = rs.get_model_with(assumptions)
        note(f"Clauses: {clauses}, assumptions: {assumptions}, model: {model}")
        if expected:
            assert tuple(model) in expected
        else:
            assert model is None
        assert rs.is_satisfiable_with(assumptions) == bool(expected)


@given(data=st.data())
@settings(max_examples=200, deadline=None)
def test_extra_clauses(data):
    """is_satisfiable_under_clauses agrees with the models of the union."""
    clauses = data.draw(satisfiable_cnfs())
    n = highest_variable(clauses)
    extra = data.draw(st.lists(
        st.lists(st.sampled_from(signed(n)), min_size=1, max_size=3),
        max_size=3,
    ))

    with RuleSet(clauses) as rs:
        note(f"Clauses: {clauses}, extra: {extra}")
        assert rs.is_satisfiable_under_clauses(extra) == bool(all_models(clauses + extra))
        assert rs.clauses == tuple(tuple(c) for c in clauses)


# ============================================================
# Property 3: SOUNDNESS OF CONCLUSIONS
#
# is_logical_conclusion(p, c) iff no model has p and not c.
# is_hard_conclusion(p, c) iff that holds and some model has not c.
# ============================================================

@given(data=st.data())
@settings(max_examples=200, deadline=None)
def test_logical_and_hard_conclusions(data):
    clauses = data.draw(satisfiable_cnfs())
    models = all_models(clauses)
    n = highest_variable(clauses)
    premise = data.draw(st.sampled_from(signed(n)))
    conclusion = data.draw(st.sampled_from(signed(n)))

    logical = all(holds(m, conclusion) for m in models if holds(m, premise))
    hard = logical and any(not holds(m, conclusion) for m in models)

    with RuleSet(clauses) as rs:
        note(f"Clauses: {clauses}, {premise} -> {conclusion}")
        assert is_logical_conclusion(premise, conclusion, rs) == logical
        assert is_hard_conclusion(premise, conclusion, rs) == hard


# ============================================================
# Property 4: DETERMINED VARIABLES
#
# v (resp. -v) is reported iff every model sets v true (resp. false);
# output is strictly ascending by variable.
# ============================================================

@given(clauses=satisfiable_cnfs())
@settings(max_examples=200, deadline=None)
def test_determined_vars(clauses):
    models = all_models(clauses)
    n = highest_variable(clauses)
    expected = []
    for v in range(1, n + 1):
        if all(holds(m, v) for m in models):
            expected.append(v)
        elif all(holds(m, -v) for m in models):
            expected.append(-v)

    with RuleSet(clauses) as rs:
        note(f"Clauses: {clauses}")
        determined = get_determined_vars(rs)
        assert determined == expected
        assert [abs(lit) for lit in determined] == sorted({abs(lit) for lit in determined})


# ============================================================
# Property 5: EQUAL VARIABLES
#
# (i, j) is reported iff both are undetermined and agree in every
# model; output is lexicographic without duplicates, and the classes
# partition the paired variables.
# ============================================================

@given(clauses=satisfiable_cnfs())
@settings(max_examples=200, deadline=None)
def test_equal_vars(clauses):
    models = all_models(clauses)
    n = highest_variable(clauses)

    def undetermined(v):
        return any(holds(m, v) for m in models) and any(holds(m, -v) for m in models)

    expected = [
        (i, j)
        for i in range(1, n + 1)
        for j in range(i + 1, n + 1)
        if undetermined(i)
        and undetermined(j)
        and all(holds(m, i) == holds(m, j) for m in models)
    ]

    with RuleSet(clauses) as rs:
        note(f"Clauses: {clauses}")
        pairs = find_equal_vars(rs)
        assert pairs == expected
        assert pairs == sorted(set(pairs))

        classes = find_equivalence_classes(rs)
        members = [v for cls in classes for v in cls]
        assert len(members) == len(set(members))
        assert set(members) == {v for pair in pairs for v in pair}
        for cls in classes:
            assert cls == sorted(cls)
            assert all((i, j) in pairs for i, j in itertools.combinations(cls, 2))


# ============================================================
# Property 6: IDEMPOTENCE
#
# Pure queries against an unchanged rule set repeat their answers.
# ============================================================

@given(clauses=satisfiable_cnfs())
@settings(max_examples=100, deadline=None)
def test_repeated_analysis_agrees(clauses):
    with RuleSet(clauses) as rs:
        first = analyze(rs)
        second = analyze(rs)
        note(f"Clauses: {clauses}")
        assert first.determined == second.determined
        assert first.equal_pairs == second.equal_pairs
        assert first.equivalence_classes == second.equivalence_classes
        assert rs.clauses == tuple(tuple(c) for c in clauses)

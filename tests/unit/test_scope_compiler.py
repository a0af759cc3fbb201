"""Unit tests for scope predicates and the scope compiler."""

import pytest

from campusrbac.domain.exceptions import IntegrityError
from campusrbac.domain.predicates import (
    ALWAYS_FALSE,
    ALWAYS_TRUE,
    AllOf,
    MemberOf,
    conjoin,
)
from campusrbac.domain.services import compile_scope
from campusrbac.domain.value_objects import EntityDimensions, Scope

STUDENT = EntityDimensions(college="college_id", course="course_id", branch="branch_id")
NOTICE = EntityDimensions(college="college_id", course="course_id", course_nullable=True)


def test_unrestricted_scope_compiles_to_true() -> None:
    predicate = compile_scope(Scope.unrestricted_scope(), STUDENT)
    assert predicate is ALWAYS_TRUE
    assert predicate.to_sql() == ("TRUE", [])


def test_unscoped_entity_is_globally_visible() -> None:
    assert compile_scope(Scope(college_ids=frozenset({1})), EntityDimensions()) is ALWAYS_TRUE


def test_empty_college_set_matches_nothing() -> None:
    predicate = compile_scope(Scope(all_courses=True, all_branches=True), STUDENT)
    assert predicate is ALWAYS_FALSE
    assert predicate.to_sql() == ("FALSE", [])
    assert not predicate.matches({"college_id": 1, "course_id": 1, "branch_id": 1})


def test_college_only_entity() -> None:
    predicate = compile_scope(Scope(college_ids=frozenset({2, 1})), EntityDimensions(college="college_id"))
    assert predicate == MemberOf("college_id", frozenset({1, 2}))
    assert predicate.to_sql() == ("college_id = ANY(%s)", [[1, 2]])


def test_all_courses_override_with_nullable_course() -> None:
    scope = Scope(college_ids=frozenset({5}), all_courses=True)
    predicate = compile_scope(scope, NOTICE)
    rows = [
        {"college_id": 5, "course_id": None},
        {"college_id": 5, "course_id": 9},
        {"college_id": 7, "course_id": 9},
    ]
    assert [predicate.matches(r) for r in rows] == [True, True, False]


def test_nullable_course_lets_null_rows_through() -> None:
    scope = Scope(college_ids=frozenset({1}), course_ids=frozenset({5}))
    predicate = compile_scope(scope, NOTICE)
    assert predicate.matches({"college_id": 1, "course_id": None})
    assert predicate.matches({"college_id": 1, "course_id": 5})
    assert not predicate.matches({"college_id": 1, "course_id": 6})
    assert predicate.to_sql() == (
        "college_id = ANY(%s) AND (course_id IS NULL OR course_id = ANY(%s))",
        [[1], [5]],
    )


def test_empty_course_set_fails_closed_even_when_nullable() -> None:
    predicate = compile_scope(Scope(college_ids=frozenset({1})), NOTICE)
    assert predicate is ALWAYS_FALSE
    assert not predicate.matches({"college_id": 1, "course_id": None})


def test_branch_dimension_enforced_without_override() -> None:
    scope = Scope(
        college_ids=frozenset({1}),
        course_ids=frozenset({5}),
        branch_ids=frozenset({9}),
    )
    predicate = compile_scope(scope, STUDENT)
    assert predicate.matches({"college_id": 1, "course_id": 5, "branch_id": 9})
    assert not predicate.matches({"college_id": 1, "course_id": 5, "branch_id": 10})
    assert not predicate.matches({"college_id": 1, "course_id": 5, "branch_id": None})


def test_all_branches_override_skips_branch_dimension() -> None:
    scope = Scope(college_ids=frozenset({1}), course_ids=frozenset({5}), all_branches=True)
    predicate = compile_scope(scope, STUDENT)
    assert predicate.matches({"college_id": 1, "course_id": 5, "branch_id": 42})


def test_invalid_column_identifier_is_rejected() -> None:
    dims = EntityDimensions(college="college_id; DROP TABLE principal")
    with pytest.raises(IntegrityError):
        compile_scope(Scope(college_ids=frozenset({1})), dims)


def test_qualified_column_matches_bare_row_key() -> None:
    predicate = MemberOf("s.college_id", frozenset({3}))
    assert predicate.matches({"college_id": 3})
    assert predicate.to_sql() == ("s.college_id = ANY(%s)", [[3]])


def test_conjoin_folds_constants_and_flattens() -> None:
    a = MemberOf("college_id", frozenset({1}))
    b = MemberOf("course_id", frozenset({2}))
    c = MemberOf("branch_id", frozenset({3}))
    assert conjoin() is ALWAYS_TRUE
    assert conjoin(ALWAYS_TRUE, a) == a
    assert conjoin(a, ALWAYS_FALSE, b) is ALWAYS_FALSE
    assert (a & b) & c == AllOf((a, b, c))

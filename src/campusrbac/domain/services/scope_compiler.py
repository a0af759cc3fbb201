"""Scope predicate compiler - turns a Scope into a row filter."""

from collections.abc import Set

from campusrbac.domain.predicates import (
    ALWAYS_FALSE,
    ALWAYS_TRUE,
    MemberOf,
    Predicate,
    conjoin,
    validate_identifier,
)
from campusrbac.domain.value_objects import EntityDimensions, Scope


def _membership(column: str, ids: Set[int], nullable: bool) -> Predicate:
    validate_identifier(column)
    if not ids:
        # An empty authorised set means no access, never "no restriction".
        return ALWAYS_FALSE
    return MemberOf(column=column, values=frozenset(ids), null_matches=nullable)


def compile_scope(scope: Scope, dimensions: EntityDimensions) -> Predicate:
    """Build the filter every read/write on a scoped entity must apply.

    College membership is always enforced. Course and branch are enforced
    unless the scope carries the matching "all" override; nullable columns
    let NULL rows (applies to every course/branch) through. An entity with
    no scoped columns is globally visible.
    """
    if scope.unrestricted or not dimensions.is_scoped:
        return ALWAYS_TRUE

    parts: list[Predicate] = []
    if dimensions.college is not None:
        parts.append(_membership(dimensions.college, scope.college_ids, nullable=False))
    if dimensions.course is not None and not scope.all_courses:
        parts.append(_membership(dimensions.course, scope.course_ids, dimensions.course_nullable))
    if dimensions.branch is not None and not scope.all_branches:
        parts.append(_membership(dimensions.branch, scope.branch_ids, dimensions.branch_nullable))
    return conjoin(*parts)

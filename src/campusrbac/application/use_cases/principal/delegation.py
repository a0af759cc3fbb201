"""Checks that an actor only hands out scope it holds itself."""

from collections.abc import Iterable

from campusrbac.domain.exceptions import AuthorizationDenied
from campusrbac.domain.value_objects import DenialReason, Scope


def ensure_within_scope(
    actor_scope: Scope | None,
    college_ids: Iterable[int],
    course_ids: Iterable[int],
    branch_ids: Iterable[int],
    all_courses: bool = False,
    all_branches: bool = False,
) -> None:
    """Raise AuthorizationDenied if the assignment reaches outside ``actor_scope``."""
    if actor_scope is None:
        raise AuthorizationDenied(DenialReason.INSUFFICIENT_SCOPE, "No scope attached")
    if actor_scope.unrestricted:
        return

    outside = set(college_ids) - actor_scope.college_ids
    if outside:
        raise AuthorizationDenied(
            DenialReason.INSUFFICIENT_SCOPE,
            f"You can only assign colleges within your scope (not {sorted(outside)})",
        )
    if not actor_scope.all_courses:
        if all_courses:
            raise AuthorizationDenied(
                DenialReason.INSUFFICIENT_SCOPE, "You cannot grant access to all courses"
            )
        outside = set(course_ids) - actor_scope.course_ids
        if outside:
            raise AuthorizationDenied(
                DenialReason.INSUFFICIENT_SCOPE,
                f"You can only assign courses within your scope (not {sorted(outside)})",
            )
    if not actor_scope.all_branches:
        if all_branches:
            raise AuthorizationDenied(
                DenialReason.INSUFFICIENT_SCOPE, "You cannot grant access to all branches"
            )
        outside = set(branch_ids) - actor_scope.branch_ids
        if outside:
            raise AuthorizationDenied(
                DenialReason.INSUFFICIENT_SCOPE,
                f"You can only assign branches within your scope (not {sorted(outside)})",
            )


def primary(ids: list[int], given: int | None) -> int | None:
    """Primary value: the submitted one if it is part of ``ids``, else the first id."""
    if given is not None and given in ids:
        return given
    return ids[0] if ids else None

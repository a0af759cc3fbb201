"""Unit tests for role scope requirements."""

import pytest

from campusrbac.domain.exceptions import (
    MissingRequiredDimension,
    MultipleValuesNotAllowed,
    ScopeNotAllowedForRole,
    ValidationError,
)
from campusrbac.domain.registry import role_requirements, validate_scope_requirements


def test_top_level_role_rejects_any_assignment() -> None:
    with pytest.raises(ScopeNotAllowedForRole):
        validate_scope_requirements("super_admin", [5], [], [])


def test_top_level_role_without_assignment_is_valid() -> None:
    validate_scope_requirements("super_admin", [], [], [])
    validate_scope_requirements("admin", [], [], [])


def test_college_principal_requires_college() -> None:
    with pytest.raises(MissingRequiredDimension) as exc:
        validate_scope_requirements("college_principal", [], [], [], all_courses=True)
    assert exc.value.dimension == "college"


def test_college_principal_may_hold_several_colleges() -> None:
    validate_scope_requirements("college_principal", [1, 2], [], [], all_courses=True, all_branches=True)


def test_single_value_dimension_rejects_several_ids() -> None:
    with pytest.raises(MultipleValuesNotAllowed) as exc:
        validate_scope_requirements("cashier", [1, 2], [], [])
    assert exc.value.dimension == "college"


def test_course_principal_all_courses_satisfies_course_requirement() -> None:
    validate_scope_requirements("course_principal", [1], [], [], all_courses=True)


def test_course_principal_without_courses_is_rejected() -> None:
    with pytest.raises(MissingRequiredDimension) as exc:
        validate_scope_requirements("course_principal", [1], [], [])
    assert exc.value.dimension == "course"


def test_course_ao_may_not_use_all_courses_override() -> None:
    with pytest.raises(ScopeNotAllowedForRole):
        validate_scope_requirements("course_ao", [1], [5], [], all_courses=True)


def test_branch_hod_requires_branch_and_allows_several() -> None:
    with pytest.raises(MissingRequiredDimension) as exc:
        validate_scope_requirements("branch_hod", [1], [5], [])
    assert exc.value.dimension == "branch"
    validate_scope_requirements("branch_hod", [1], [5], [9, 10])


def test_custom_role_uses_college_tier_rules() -> None:
    with pytest.raises(MissingRequiredDimension):
        validate_scope_requirements("lab_incharge", [], [], [])
    validate_scope_requirements("lab_incharge", [1, 2], [], [])


def test_requirement_errors_are_validation_errors() -> None:
    assert issubclass(MissingRequiredDimension, ValidationError)
    assert issubclass(ScopeNotAllowedForRole, ValidationError)
    assert issubclass(MultipleValuesNotAllowed, ValidationError)


def test_requirements_to_dict() -> None:
    data = role_requirements("course_principal").to_dict()
    assert data["requires_course"] is True
    assert data["all_course_override"] is True
    assert data["requires_branch"] is False
    assert role_requirements("super_admin").to_dict()["allows_college"] is False

"""Per-role scope requirements and their validation."""

from collections.abc import Iterable
from dataclasses import dataclass
from types import MappingProxyType

from campusrbac.domain.exceptions import (
    MissingRequiredDimension,
    MultipleValuesNotAllowed,
    ScopeNotAllowedForRole,
)
from campusrbac.domain.registry.roles import is_top_level_role
from campusrbac.domain.value_objects import BuiltInRole, Dimension


@dataclass(frozen=True)
class DimensionRule:
    """What a role may carry on one scope dimension."""

    required: bool = False
    allowed: bool = True
    multiple: bool = False
    allow_all: bool = False


@dataclass(frozen=True)
class RoleRequirements:
    """Scope requirements declared for a role."""

    college: DimensionRule
    course: DimensionRule
    branch: DimensionRule

    def rule_for(self, dimension: Dimension) -> DimensionRule:
        return getattr(self, dimension.value)

    def to_dict(self) -> dict[str, bool]:
        out: dict[str, bool] = {}
        for dimension in Dimension:
            rule = self.rule_for(dimension)
            out[f"requires_{dimension}"] = rule.required
            out[f"allows_{dimension}"] = rule.allowed
            out[f"multiple_{dimension}"] = rule.multiple
            out[f"all_{dimension}_override"] = rule.allow_all
        return out


_FORBIDDEN = DimensionRule(allowed=False)
_OPTIONAL_WITH_ALL = DimensionRule(multiple=True, allow_all=True)

_COLLEGE_TIER = RoleRequirements(
    college=DimensionRule(required=True, multiple=True),
    course=_OPTIONAL_WITH_ALL,
    branch=_OPTIONAL_WITH_ALL,
)
_COLLEGE_STAFF = RoleRequirements(
    college=DimensionRule(required=True),
    course=_OPTIONAL_WITH_ALL,
    branch=_OPTIONAL_WITH_ALL,
)

ROLE_REQUIREMENTS = MappingProxyType({
    BuiltInRole.SUPER_ADMIN: RoleRequirements(_FORBIDDEN, _FORBIDDEN, _FORBIDDEN),
    BuiltInRole.COLLEGE_PRINCIPAL: _COLLEGE_TIER,
    BuiltInRole.COLLEGE_AO: _COLLEGE_TIER,
    BuiltInRole.COURSE_PRINCIPAL: RoleRequirements(
        college=DimensionRule(required=True),
        course=DimensionRule(required=True, multiple=True, allow_all=True),
        branch=_OPTIONAL_WITH_ALL,
    ),
    BuiltInRole.COURSE_AO: RoleRequirements(
        college=DimensionRule(required=True),
        course=DimensionRule(required=True),
        branch=_OPTIONAL_WITH_ALL,
    ),
    BuiltInRole.BRANCH_HOD: RoleRequirements(
        college=DimensionRule(required=True),
        course=DimensionRule(required=True),
        branch=DimensionRule(required=True, multiple=True),
    ),
    BuiltInRole.COLLEGE_ATTENDER: _COLLEGE_STAFF,
    BuiltInRole.OFFICE_ASSISTANT: _COLLEGE_STAFF,
    BuiltInRole.CASHIER: _COLLEGE_STAFF,
})

CUSTOM_ROLE_REQUIREMENTS = _COLLEGE_TIER


def role_requirements(role: str) -> RoleRequirements:
    if is_top_level_role(role):
        return ROLE_REQUIREMENTS[BuiltInRole.SUPER_ADMIN]
    return ROLE_REQUIREMENTS.get(role, CUSTOM_ROLE_REQUIREMENTS)


def validate_scope_requirements(
    role: str,
    college_ids: Iterable[int],
    course_ids: Iterable[int],
    branch_ids: Iterable[int],
    all_courses: bool = False,
    all_branches: bool = False,
) -> None:
    """Reject a scope assignment that does not fit ``role``.

    Raises MissingRequiredDimension, ScopeNotAllowedForRole or
    MultipleValuesNotAllowed. Returns None when the assignment is valid.
    """
    ids_by_dimension = {
        Dimension.COLLEGE: {i for i in college_ids if i is not None},
        Dimension.COURSE: {i for i in course_ids if i is not None},
        Dimension.BRANCH: {i for i in branch_ids if i is not None},
    }
    if is_top_level_role(role):
        if any(ids_by_dimension.values()):
            raise ScopeNotAllowedForRole(role, "to a college, course or branch")
        return

    requirements = role_requirements(role)
    all_flags = {
        Dimension.COLLEGE: False,
        Dimension.COURSE: bool(all_courses),
        Dimension.BRANCH: bool(all_branches),
    }
    for dimension in Dimension:
        rule = requirements.rule_for(dimension)
        ids = ids_by_dimension[dimension]
        use_all = all_flags[dimension]
        if use_all and not rule.allow_all:
            raise ScopeNotAllowedForRole(role, f"all {dimension}s")
        if ids and not rule.allowed:
            raise ScopeNotAllowedForRole(role, f"a {dimension}")
        if len(ids) > 1 and not rule.multiple:
            raise MultipleValuesNotAllowed(role, dimension.value)
        if rule.required and not ids and not use_all:
            raise MissingRequiredDimension(role, dimension.value)

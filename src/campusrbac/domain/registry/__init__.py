"""Static role and permission registry."""

from campusrbac.domain.registry.catalog import available_roles, module_catalog
from campusrbac.domain.registry.modules import MODULE_ACTIONS, MODULE_LABELS, module_actions
from campusrbac.domain.registry.permissions import (
    PermissionSet,
    default_permissions,
    elevated_permissions,
    has_module_access,
    has_permission,
    parse_permissions,
    role_default_permissions,
)
from campusrbac.domain.registry.requirements import (
    DimensionRule,
    RoleRequirements,
    role_requirements,
    validate_scope_requirements,
)
from campusrbac.domain.registry.roles import (
    MANAGEMENT_TIERS,
    ROLE_DESCRIPTIONS,
    ROLE_HIERARCHY,
    ROLE_LABELS,
    TOP_LEVEL_ROLE,
    can_create_role,
    creatable_roles,
    is_built_in_role,
    is_reserved_role_key,
    is_top_level_role,
    normalize_role,
    role_label,
)

__all__ = [
    "DimensionRule",
    "MANAGEMENT_TIERS",
    "MODULE_ACTIONS",
    "MODULE_LABELS",
    "PermissionSet",
    "ROLE_DESCRIPTIONS",
    "ROLE_HIERARCHY",
    "ROLE_LABELS",
    "RoleRequirements",
    "TOP_LEVEL_ROLE",
    "available_roles",
    "can_create_role",
    "creatable_roles",
    "default_permissions",
    "elevated_permissions",
    "has_module_access",
    "has_permission",
    "is_built_in_role",
    "is_reserved_role_key",
    "is_top_level_role",
    "module_actions",
    "module_catalog",
    "normalize_role",
    "parse_permissions",
    "role_default_permissions",
    "role_label",
    "role_requirements",
    "validate_scope_requirements",
]

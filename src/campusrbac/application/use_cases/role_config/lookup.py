"""Role config resolution shared by the role and principal use cases."""

from campusrbac.application.ports.unit_of_work import UnitOfWork
from campusrbac.domain.entities import RoleConfig
from campusrbac.domain.registry import (
    PermissionSet,
    ROLE_DESCRIPTIONS,
    default_permissions,
    is_built_in_role,
    normalize_role,
    parse_permissions,
    role_default_permissions,
    role_label,
)


def built_in_config(role_key: str) -> RoleConfig:
    """Config of a built-in role as shipped, before any stored override."""
    return RoleConfig(
        role_key=role_key,
        label=role_label(role_key),
        description=ROLE_DESCRIPTIONS.get(role_key, ""),
        permissions=role_default_permissions(role_key),
        is_custom=False,
    )


async def load_role_config(uow: UnitOfWork, role_key: str) -> RoleConfig | None:
    """Stored config (normalised), else the built-in default, else None."""
    role_key = normalize_role(role_key)
    stored = await uow.role_configs.get(role_key)
    if stored is not None:
        return RoleConfig(
            role_key=stored.role_key,
            label=stored.label,
            description=stored.description,
            permissions=parse_permissions(stored.permissions),
            is_custom=stored.is_custom,
            updated_at=stored.updated_at,
        )
    if is_built_in_role(role_key):
        return built_in_config(role_key)
    return None


async def effective_permissions(uow: UnitOfWork, role_key: str) -> PermissionSet:
    config = await load_role_config(uow, role_key)
    if config is None:
        return default_permissions()
    return config.permissions

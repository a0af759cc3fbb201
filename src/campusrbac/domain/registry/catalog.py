"""Labelled listings of roles and modules for clients building forms."""

from collections.abc import Iterable
from typing import Any

from campusrbac.domain.entities import RoleConfig
from campusrbac.domain.registry.modules import ACTION_LABELS, MODULE_ACTIONS, MODULE_LABELS
from campusrbac.domain.registry.requirements import role_requirements
from campusrbac.domain.registry.roles import creatable_roles, is_top_level_role, role_label
from campusrbac.domain.value_objects import BuiltInRole


def available_roles(
    creator_role: str, custom_roles: Iterable[RoleConfig] = ()
) -> list[dict[str, Any]]:
    """Roles ``creator_role`` may provision, in hierarchy order.

    Custom roles follow the built-ins, sorted by key, and are offered to the
    top-level role only.
    """
    allowed = creatable_roles(creator_role)
    roles = [
        {
            "value": role.value,
            "label": role_label(role),
            "requirements": role_requirements(role).to_dict(),
        }
        for role in BuiltInRole
        if role in allowed
    ]
    if is_top_level_role(creator_role):
        for config in sorted(custom_roles, key=lambda c: c.role_key):
            if not config.is_custom:
                continue
            roles.append(
                {
                    "value": config.role_key,
                    "label": config.label or config.role_key,
                    "requirements": role_requirements(config.role_key).to_dict(),
                }
            )
    return roles

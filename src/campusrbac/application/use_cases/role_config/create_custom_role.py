"""Create custom role use case."""

import logging
import re
from datetime import UTC, datetime
from typing import Any

from campusrbac.application.ports import PermissionGuard
from campusrbac.domain.entities import RoleConfig
from campusrbac.domain.exceptions import DuplicateRoleKey, ReservedRoleKey, ValidationError
from campusrbac.domain.registry import is_reserved_role_key, parse_permissions
from campusrbac.domain.value_objects import Identity, Module

logger = logging.getLogger(__name__)

_WHITESPACE = re.compile(r"\s+")
_INVALID_KEY_CHARS = re.compile(r"[^a-z0-9_]")


def canonical_role_key(raw: str | None) -> str:
    """Lowercase, whitespace to underscores, anything outside [a-z0-9_] dropped."""
    if raw is None:
        return ""
    key = _WHITESPACE.sub("_", str(raw).strip().lower())
    return _INVALID_KEY_CHARS.sub("", key)


class CreateCustomRoleUseCase:
    """Register a new custom role with its own permission set."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(
        self,
        actor: Identity,
        role_key: str,
        label: str | None = None,
        description: str | None = None,
        permissions: Any = None,
    ) -> RoleConfig:
        """Create the role. Actor needs user_management.control."""
        context = await self._guard.authorize(
            actor, permission=(Module.USER_MANAGEMENT, "control")
        )
        context.raise_for_denial()

        key = canonical_role_key(role_key)
        if len(key) < 2:
            raise ValidationError("role_key is required (e.g. custom_manager)")
        if is_reserved_role_key(key):
            raise ReservedRoleKey(key)

        config = RoleConfig(
            role_key=key,
            label=(label or "").strip() or key,
            description=(description or "").strip(),
            permissions=parse_permissions(permissions),
            is_custom=True,
            updated_at=datetime.now(UTC),
        )
        async with self._uow_factory() as uow:
            if await uow.role_configs.get(key) is not None:
                raise DuplicateRoleKey(key)
            await uow.role_configs.create(config)

        logger.info("Custom role %s created by principal %s", key, actor.principal_id)
        return config

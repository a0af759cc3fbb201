"""Delete custom role use case."""

import logging

from campusrbac.application.ports import PermissionGuard
from campusrbac.domain.exceptions import BuiltInRoleUndeletable, RoleInUse, UnknownRole
from campusrbac.domain.registry import is_reserved_role_key
from campusrbac.domain.value_objects import Identity, Module

logger = logging.getLogger(__name__)


class DeleteCustomRoleUseCase:
    """Remove a custom role that nobody holds anymore."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(self, actor: Identity, role_key: str) -> None:
        context = await self._guard.authorize(
            actor, permission=(Module.USER_MANAGEMENT, "control")
        )
        context.raise_for_denial()

        if is_reserved_role_key(role_key):
            raise BuiltInRoleUndeletable(role_key)

        async with self._uow_factory() as uow:
            if await uow.role_configs.get(role_key) is None:
                raise UnknownRole(role_key)
            # Deactivated principals still count; reactivating them must not orphan a role.
            holders = await uow.principals.count_by_role(role_key)
            if holders:
                raise RoleInUse(role_key, holders)
            await uow.role_configs.delete(role_key)

        logger.info("Custom role %s deleted by principal %s", role_key, actor.principal_id)

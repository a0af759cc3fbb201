"""Deactivate principal use case."""

import logging

from campusrbac.application.ports import PermissionGuard
from campusrbac.domain.exceptions import NotFound
from campusrbac.domain.value_objects import Identity, Module

logger = logging.getLogger(__name__)


class DeactivatePrincipalUseCase:
    """Soft-delete: the record stays, the identity stops resolving."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(self, actor: Identity, principal_id: int) -> None:
        context = await self._guard.authorize(
            actor,
            permission=(Module.USER_MANAGEMENT, "control"),
            manage_target=principal_id,
        )
        context.raise_for_denial()

        async with self._uow_factory() as uow:
            if await uow.principals.get_by_id(principal_id) is None:
                raise NotFound("Principal", principal_id)
            await uow.principals.deactivate(principal_id)

        logger.info("Principal %s deactivated by principal %s", principal_id, actor.principal_id)

"""List available roles use case."""

from typing import Any

from campusrbac.application.ports import PermissionGuard
from campusrbac.domain.registry import available_roles, is_top_level_role
from campusrbac.domain.value_objects import Identity


class ListAvailableRolesUseCase:
    """Roles the actor may assign to new principals, custom roles included."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(self, actor: Identity) -> list[dict[str, Any]]:
        context = await self._guard.authorize(actor)
        context.raise_for_denial()

        if not is_top_level_role(context.role):
            return available_roles(context.role)
        async with self._uow_factory() as uow:
            configs = await uow.role_configs.list_all()
        return available_roles(context.role, configs)

"""Get role config use cases."""

from campusrbac.application.ports import PermissionGuard
from campusrbac.application.use_cases.role_config.lookup import (
    effective_permissions,
    load_role_config,
)
from campusrbac.domain.entities import RoleConfig
from campusrbac.domain.exceptions import UnknownRole
from campusrbac.domain.registry import PermissionSet
from campusrbac.domain.value_objects import BuiltInRole, Identity, Module


class GetEffectivePermissionsUseCase:
    """Permission set a new holder of ``role_key`` receives."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(self, actor: Identity, role_key: str) -> PermissionSet:
        context = await self._guard.authorize(
            actor, permission=(Module.USER_MANAGEMENT, "view")
        )
        context.raise_for_denial()

        async with self._uow_factory() as uow:
            return await effective_permissions(uow, role_key)


class GetRoleConfigUseCase:
    """Single role config, built-in or custom."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(self, actor: Identity, role_key: str) -> RoleConfig:
        context = await self._guard.authorize(
            actor, permission=(Module.USER_MANAGEMENT, "view")
        )
        context.raise_for_denial()

        async with self._uow_factory() as uow:
            config = await load_role_config(uow, role_key)
        if config is None:
            raise UnknownRole(role_key)
        return config


class ListRoleConfigsUseCase:
    """Configurable built-in roles followed by custom roles."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(self, actor: Identity) -> list[RoleConfig]:
        context = await self._guard.authorize(
            actor, permission=(Module.USER_MANAGEMENT, "view")
        )
        context.raise_for_denial()

        configs: list[RoleConfig] = []
        async with self._uow_factory() as uow:
            for role in BuiltInRole:
                if role is BuiltInRole.SUPER_ADMIN:
                    continue
                config = await load_role_config(uow, role.value)
                if config is not None:
                    configs.append(config)
            custom = [c for c in await uow.role_configs.list_all() if c.is_custom]
            for stored in sorted(custom, key=lambda c: c.role_key):
                config = await load_role_config(uow, stored.role_key)
                if config is not None:
                    configs.append(config)
        return configs

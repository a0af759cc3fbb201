"""Update role config use case."""

import logging
from datetime import UTC, datetime

from campusrbac.application.dto.role_config_dto import RoleConfigUpdate, RoleConfigUpdateResult
from campusrbac.application.ports import PermissionGuard
from campusrbac.application.use_cases.role_config.lookup import load_role_config
from campusrbac.domain.entities import RoleConfig
from campusrbac.domain.exceptions import UnknownRole, ValidationError
from campusrbac.domain.registry import is_top_level_role, parse_permissions
from campusrbac.domain.value_objects import Identity, Module

logger = logging.getLogger(__name__)


class UpdateRoleConfigUseCase:
    """Edit a role's label, description or permissions, optionally pushing them to holders."""

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
        update: RoleConfigUpdate,
        propagate: bool = True,
    ) -> RoleConfigUpdateResult:
        """Upsert the config; with ``propagate`` overwrite every holder's permissions.

        The config write and the bulk overwrite share one unit of work, so they
        commit or roll back together.
        """
        context = await self._guard.authorize(
            actor, permission=(Module.USER_MANAGEMENT, "control")
        )
        context.raise_for_denial()

        if is_top_level_role(role_key):
            raise ValidationError("The top-level role always holds every permission")

        async with self._uow_factory() as uow:
            current = await load_role_config(uow, role_key)
            if current is None:
                raise UnknownRole(role_key)

            config = RoleConfig(
                role_key=current.role_key,
                label=(update.label or "").strip() or current.label,
                description=(
                    update.description.strip()
                    if update.description is not None
                    else current.description
                ),
                permissions=(
                    parse_permissions(update.permissions)
                    if update.permissions is not None
                    else current.permissions
                ),
                is_custom=current.is_custom,
                updated_at=datetime.now(UTC),
            )
            await uow.role_configs.upsert(config)

            updated = 0
            if propagate:
                updated = await uow.principals.set_permissions_for_role(
                    config.role_key, config.permissions
                )

        logger.info(
            "Role %s updated by principal %s; permissions applied to %d principal(s)",
            config.role_key,
            actor.principal_id,
            updated,
        )
        return RoleConfigUpdateResult(config=config, updated_user_count=updated)

"""Update principal use case."""

import logging
from datetime import UTC, datetime

from campusrbac.application.dto.principal_dto import PrincipalUpdateInput
from campusrbac.application.ports import PermissionGuard
from campusrbac.domain.entities import Principal
from campusrbac.domain.exceptions import NotFound, UnknownRole, ValidationError
from campusrbac.domain.registry import (
    is_built_in_role,
    is_top_level_role,
    parse_permissions,
    validate_scope_requirements,
)
from campusrbac.domain.value_objects import Identity, Module

logger = logging.getLogger(__name__)


def _assigned_ids(principal: Principal) -> tuple[list[int], list[int], list[int]]:
    def fold(ids: list[int], primary: int | None) -> list[int]:
        if ids:
            return list(ids)
        return [primary] if primary is not None else []

    return (
        fold(principal.college_ids, principal.college_id),
        fold(principal.course_ids, principal.course_id),
        fold(principal.branch_ids, principal.branch_id),
    )


class UpdatePrincipalUseCase:
    """Change a principal's name, role, permission override or active flag."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(self, actor: Identity, principal_id: int, data: PrincipalUpdateInput) -> Principal:
        """Apply the update.

        A new role must be creatable by the actor and satisfied by the
        principal's current scope assignment. The permission set is kept on a
        role change unless an override is given. Setting ``is_active`` to true
        reactivates a deactivated principal.
        """
        if data.is_empty():
            raise ValidationError("No fields to update")

        context = await self._guard.authorize(
            actor,
            permission=(Module.USER_MANAGEMENT, "control"),
            create_payload={"role": data.role} if data.role is not None else None,
            manage_target=principal_id,
        )
        context.raise_for_denial()

        async with self._uow_factory() as uow:
            principal = await uow.principals.get_by_id(principal_id)
            if principal is None:
                raise NotFound("Principal", principal_id)

            if data.name is not None:
                if not data.name.strip():
                    raise ValidationError("name must not be empty")
                principal.name = data.name.strip()

            if data.role is not None and data.role != principal.role:
                if not is_built_in_role(data.role) and await uow.role_configs.get(data.role) is None:
                    raise UnknownRole(data.role)
                validate_scope_requirements(
                    data.role,
                    *_assigned_ids(principal),
                    all_courses=principal.all_courses,
                    all_branches=principal.all_branches,
                )
                principal.role = data.role

            if data.permissions is not None:
                if is_top_level_role(principal.role):
                    raise ValidationError("Permissions of the top-level role cannot be overridden")
                principal.permissions = parse_permissions(data.permissions)

            if data.is_active is not None:
                principal.is_active = data.is_active

            principal.updated_at = datetime.now(UTC)
            await uow.principals.update(principal)

        logger.info("Principal %s updated by principal %s", principal_id, actor.principal_id)
        return principal

"""Create principal use case."""

import logging
from datetime import UTC, datetime

from campusrbac.application.dto.principal_dto import PrincipalCreateInput
from campusrbac.application.ports import PermissionGuard
from campusrbac.application.use_cases.principal.delegation import ensure_within_scope, primary
from campusrbac.application.use_cases.role_config.lookup import effective_permissions
from campusrbac.domain.entities import Principal
from campusrbac.domain.exceptions import ConflictError, UnknownRole, ValidationError
from campusrbac.domain.registry import (
    elevated_permissions,
    is_built_in_role,
    is_top_level_role,
    parse_permissions,
    validate_scope_requirements,
)
from campusrbac.domain.value_objects import Identity, Module

logger = logging.getLogger(__name__)


class CreatePrincipalUseCase:
    """Provision a principal below the actor in the role hierarchy."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(self, actor: Identity, data: PrincipalCreateInput) -> Principal:
        """Create the principal.

        Order: guard (permission, then creatable role), scope requirements of the
        target role, delegation within the actor's own scope, login uniqueness.
        Permissions default to the role's effective set unless overridden.
        """
        context = await self._guard.authorize(
            actor,
            permission=(Module.USER_MANAGEMENT, "control"),
            create_payload={"role": data.role},
        )
        context.raise_for_denial()

        if not data.name or not data.email or not data.username:
            raise ValidationError("name, email and username are required")

        scope = data.scope
        college_ids, course_ids, branch_ids = scope.normalized()
        validate_scope_requirements(
            data.role,
            college_ids,
            course_ids,
            branch_ids,
            all_courses=scope.all_courses,
            all_branches=scope.all_branches,
        )
        ensure_within_scope(
            context.scope,
            college_ids,
            course_ids,
            branch_ids,
            all_courses=scope.all_courses,
            all_branches=scope.all_branches,
        )

        async with self._uow_factory() as uow:
            if not is_built_in_role(data.role) and await uow.role_configs.get(data.role) is None:
                raise UnknownRole(data.role)
            if await uow.principals.get_by_login(data.email, data.username) is not None:
                raise ConflictError("Email or username already exists")

            if is_top_level_role(data.role):
                permissions = elevated_permissions()
            elif data.permissions is not None:
                permissions = parse_permissions(data.permissions)
            else:
                permissions = await effective_permissions(uow, data.role)

            now = datetime.now(UTC)
            principal = await uow.principals.create(
                Principal(
                    id=0,
                    name=data.name,
                    email=data.email,
                    username=data.username,
                    role=data.role,
                    permissions=permissions,
                    college_id=primary(college_ids, scope.college_id),
                    course_id=primary(course_ids, scope.course_id),
                    branch_id=primary(branch_ids, scope.branch_id),
                    college_ids=college_ids,
                    course_ids=course_ids,
                    branch_ids=branch_ids,
                    all_courses=scope.all_courses,
                    all_branches=scope.all_branches,
                    created_by=actor.principal_id,
                    created_at=now,
                    updated_at=now,
                )
            )

        logger.info(
            "Principal %s (%s) created by principal %s",
            principal.id,
            principal.role,
            actor.principal_id,
        )
        return principal

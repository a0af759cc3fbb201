"""Update principal scope use case."""

import logging
from datetime import UTC, datetime

from campusrbac.application.dto.principal_dto import ScopeAssignmentInput
from campusrbac.application.ports import PermissionGuard
from campusrbac.application.use_cases.principal.delegation import ensure_within_scope, primary
from campusrbac.domain.entities import Principal
from campusrbac.domain.exceptions import NotFound
from campusrbac.domain.registry import validate_scope_requirements
from campusrbac.domain.value_objects import Identity, Module

logger = logging.getLogger(__name__)


class UpdatePrincipalScopeUseCase:
    """Replace a principal's scope assignment."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(
        self, actor: Identity, principal_id: int, scope: ScopeAssignmentInput
    ) -> Principal:
        context = await self._guard.authorize(
            actor,
            permission=(Module.USER_MANAGEMENT, "control"),
            manage_target=principal_id,
        )
        context.raise_for_denial()

        college_ids, course_ids, branch_ids = scope.normalized()
        async with self._uow_factory() as uow:
            principal = await uow.principals.get_by_id(principal_id)
            if principal is None:
                raise NotFound("Principal", principal_id)

            validate_scope_requirements(
                principal.role,
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

            principal.college_id = primary(college_ids, scope.college_id)
            principal.course_id = primary(course_ids, scope.course_id)
            principal.branch_id = primary(branch_ids, scope.branch_id)
            principal.college_ids = college_ids
            principal.course_ids = course_ids
            principal.branch_ids = branch_ids
            principal.all_courses = scope.all_courses
            principal.all_branches = scope.all_branches
            principal.updated_at = datetime.now(UTC)
            await uow.principals.update(principal)

        logger.info("Scope of principal %s updated by principal %s", principal_id, actor.principal_id)
        return principal

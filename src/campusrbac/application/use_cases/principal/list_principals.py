"""List principals use case."""

from campusrbac.application.ports import PermissionGuard
from campusrbac.domain.entities import Principal
from campusrbac.domain.services import compile_scope
from campusrbac.domain.value_objects import EntityDimensions, Identity, Module

# Principals without a course/branch assignment sit at college level.
PRINCIPAL_DIMENSIONS = EntityDimensions(
    college="college_id",
    course="course_id",
    branch="branch_id",
    course_nullable=True,
    branch_nullable=True,
)


class ListPrincipalsUseCase:
    """Principals visible to the actor, filtered by its compiled scope."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(self, actor: Identity, include_inactive: bool = False) -> list[Principal]:
        context = await self._guard.authorize(
            actor, permission=(Module.USER_MANAGEMENT, "view")
        )
        context.raise_for_denial()

        predicate = compile_scope(context.scope, PRINCIPAL_DIMENSIONS)
        async with self._uow_factory() as uow:
            return await uow.principals.list(predicate, include_inactive=include_inactive)

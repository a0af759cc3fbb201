"""Get principal use case."""

from campusrbac.application.ports import PermissionGuard
from campusrbac.application.use_cases.principal.list_principals import PRINCIPAL_DIMENSIONS
from campusrbac.domain.entities import Principal
from campusrbac.domain.exceptions import NotFound
from campusrbac.domain.services import compile_scope
from campusrbac.domain.value_objects import Identity, Module


class GetPrincipalUseCase:
    """Single principal, visible only inside the actor's scope."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_guard: PermissionGuard,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._guard = permission_guard

    async def execute(self, actor: Identity, principal_id: int) -> Principal:
        """Principals outside the actor's scope are reported as missing."""
        context = await self._guard.authorize(
            actor, permission=(Module.USER_MANAGEMENT, "view")
        )
        context.raise_for_denial()

        predicate = compile_scope(context.scope, PRINCIPAL_DIMENSIONS)
        async with self._uow_factory() as uow:
            principal = await uow.principals.get_by_id(principal_id)
        if principal is None or not predicate.matches(vars(principal)):
            raise NotFound("Principal", principal_id)
        return principal

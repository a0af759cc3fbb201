"""Scope resolver implementation - reads scope assignments from the principal table."""

import logging
from collections.abc import Iterable

from campusrbac.domain.entities import Principal
from campusrbac.domain.exceptions import PrincipalNotFound
from campusrbac.domain.registry import is_top_level_role
from campusrbac.domain.value_objects import Identity, Scope

logger = logging.getLogger(__name__)


def _fold(ids: Iterable[int | None], primary: int | None) -> frozenset[int]:
    values = {i for i in ids if i is not None}
    if primary is not None:
        values.add(primary)
    return frozenset(values)


def scope_for_principal(principal: Principal) -> Scope:
    """Scope of an already-loaded principal record."""
    if is_top_level_role(principal.role):
        return Scope.unrestricted_scope()
    return Scope(
        college_ids=_fold(principal.college_ids, principal.college_id),
        course_ids=_fold(principal.course_ids, principal.course_id),
        branch_ids=_fold(principal.branch_ids, principal.branch_id),
        all_courses=principal.all_courses,
        all_branches=principal.all_branches,
    )


class StoreScopeResolver:
    """Resolves the current scope of an identity, once per operation, uncached."""

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def resolve(self, identity: Identity) -> Scope:
        """Scope for ``identity``; top-level role never touches the store."""
        if is_top_level_role(identity.role):
            return Scope.unrestricted_scope()

        async with self._uow_factory() as uow:
            principal = await uow.principals.get_by_id(identity.principal_id)
        if principal is None or not principal.is_active:
            raise PrincipalNotFound(identity.principal_id)

        scope = scope_for_principal(principal)
        logger.debug("Resolved scope for principal %s: %s", principal.id, scope.describe())
        return scope

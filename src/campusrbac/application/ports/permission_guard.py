"""Permission guard port - RBAC authorization of inbound operations."""

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from campusrbac.application.dto.authorization import AuthorizationContext
from campusrbac.domain.value_objects import Identity


class PermissionGuard(Protocol):
    """Port for authorizing an operation and attaching the actor's scope."""

    async def authorize(
        self,
        identity: Identity,
        *,
        roles: Iterable[str] | None = None,
        permission: tuple[str, str] | None = None,
        create_payload: Mapping[str, Any] | None = None,
        manage_target: int | None = None,
    ) -> AuthorizationContext: ...

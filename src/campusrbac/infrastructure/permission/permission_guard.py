"""Permission guard implementation - checks operations against stored principals."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from campusrbac.application.dto.authorization import (
    AuthorizationContext,
    Decision,
    GuardState,
)
from campusrbac.domain.exceptions import NotFound, PrincipalNotFound
from campusrbac.domain.registry import (
    MANAGEMENT_TIERS,
    can_create_role,
    has_permission,
    is_built_in_role,
    is_top_level_role,
    normalize_role,
    parse_permissions,
)
from campusrbac.domain.value_objects import DenialReason, Dimension, Identity
from campusrbac.infrastructure.permission.scope_resolver import scope_for_principal

logger = logging.getLogger(__name__)


class RBACPermissionGuard:
    """Authorizes inbound operations and attaches the actor's scope.

    Role, scope and permissions always come from the stored principal record,
    never from claims cached in the login token. "No access" is returned as a
    denial; only an unresolvable principal raises.
    """

    def __init__(self, unit_of_work_factory: type) -> None:
        self._uow_factory = unit_of_work_factory

    async def authenticate(self, identity: Identity) -> AuthorizationContext:
        """Load the current principal record for ``identity``."""
        async with self._uow_factory() as uow:
            principal = await uow.principals.get_by_id(identity.principal_id)
        if principal is None or not principal.is_active:
            logger.info("No active principal for identity %s", identity.principal_id)
            raise PrincipalNotFound(identity.principal_id)
        return AuthorizationContext(
            identity=identity,
            principal=principal,
            state=GuardState.AUTHENTICATED,
        )

    def attach_scope(self, context: AuthorizationContext) -> AuthorizationContext:
        if context.principal is None:
            raise PrincipalNotFound(context.identity.principal_id)
        context.scope = scope_for_principal(context.principal)
        context.state = GuardState.SCOPE_ATTACHED
        return context

    def require_role(self, context: AuthorizationContext, allowed_roles: Iterable[str]) -> Decision:
        role = normalize_role(context.role)
        allowed = {normalize_role(r) for r in allowed_roles}
        if is_top_level_role(role) or role in allowed:
            return Decision.allow()
        return Decision.deny(
            DenialReason.ROLE_NOT_ALLOWED,
            f"Access denied. Required role: {' or '.join(sorted(allowed))}",
        )

    def require_permission(self, context: AuthorizationContext, module: str, action: str) -> Decision:
        if is_top_level_role(context.role):
            return Decision.allow()
        stored = context.principal.permissions if context.principal else None
        if has_permission(parse_permissions(stored), module, action):
            return Decision.allow()
        return Decision.deny(
            DenialReason.PERMISSION_MISSING,
            f"Access denied. Required permission: {module} ({action})",
        )

    async def require_can_create_role(
        self, context: AuthorizationContext, payload: Mapping[str, Any]
    ) -> Decision:
        target = payload.get("role") if payload else None
        if not target:
            return Decision.deny(DenialReason.MISSING_TARGET_ROLE, "Role is required")
        target = str(target)

        if can_create_role(context.role, target):
            return Decision.allow()

        if is_top_level_role(context.role) and not is_built_in_role(target):
            async with self._uow_factory() as uow:
                config = await uow.role_configs.get(target)
            if config is not None and config.is_custom:
                return Decision.allow()

        return Decision.deny(
            DenialReason.ROLE_NOT_CREATABLE,
            f"You do not have permission to create users with role: {target}",
        )

    async def require_can_manage_user(self, context: AuthorizationContext, target_id: int) -> Decision:
        if is_top_level_role(context.role):
            return Decision.allow()

        manager_id = context.identity.principal_id
        if target_id == manager_id:
            return Decision.deny(
                DenialReason.SELF_MANAGEMENT_FORBIDDEN,
                "You cannot manage your own account",
            )

        async with self._uow_factory() as uow:
            target = await uow.principals.get_by_id(target_id)
            manager = await uow.principals.get_by_id(manager_id)
        if target is None:
            raise NotFound("Principal", target_id)
        if manager is None or not manager.is_active:
            raise PrincipalNotFound(manager_id)

        tier = MANAGEMENT_TIERS.get(manager.role)
        if tier is Dimension.COLLEGE:
            same_scope = manager.college_id is not None and target.college_id == manager.college_id
        elif tier is Dimension.COURSE:
            same_scope = manager.course_id is not None and target.course_id == manager.course_id
        else:
            return Decision.deny(
                DenialReason.INSUFFICIENT_SCOPE,
                "You do not have permission to manage this user",
            )
        if not same_scope:
            return Decision.deny(
                DenialReason.INSUFFICIENT_SCOPE,
                f"You can only manage users in your {tier}",
            )
        # Peers and superiors in the same scope are off limits.
        if not can_create_role(manager.role, target.role):
            return Decision.deny(
                DenialReason.ROLE_NOT_CREATABLE,
                f"You cannot manage users with role: {target.role}",
            )
        return Decision.allow()

    async def authorize(
        self,
        identity: Identity,
        *,
        roles: Iterable[str] | None = None,
        permission: tuple[str, str] | None = None,
        create_payload: Mapping[str, Any] | None = None,
        manage_target: int | None = None,
    ) -> AuthorizationContext:
        """Run the guard for one operation.

        Returns the context in ``AUTHORIZED`` state with its scope attached, or
        in ``DENIED`` state with the denial and no scope.
        """
        context = await self.authenticate(identity)
        self.attach_scope(context)

        decision = Decision.allow()
        if roles is not None:
            decision = self.require_role(context, roles)
        if decision.allowed and permission is not None:
            decision = self.require_permission(context, *permission)
        if decision.allowed and create_payload is not None:
            decision = await self.require_can_create_role(context, create_payload)
        if decision.allowed and manage_target is not None:
            decision = await self.require_can_manage_user(context, manage_target)

        if decision.denial is not None:
            logger.info(
                "Denied principal %s (%s): %s",
                identity.principal_id,
                context.role,
                decision.denial.reason,
            )
            context.deny(decision.denial)
            return context

        context.state = GuardState.AUTHORIZED
        return context

"""Domain exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from campusrbac.domain.value_objects.denial_reason import DenialReason


class CampusRBACError(Exception):
    """Base exception for campusrbac."""

    pass


class ValidationError(CampusRBACError):
    """Validation failed for input data."""

    pass


class MissingRequiredDimension(ValidationError):
    """Role requires a college/course/branch assignment that was not given."""

    def __init__(self, role: str, dimension: str) -> None:
        super().__init__(f"{role} requires a {dimension} assignment")
        self.role = role
        self.dimension = dimension


class ScopeNotAllowedForRole(ValidationError):
    """Scope carries a dimension or override the role may not hold."""

    def __init__(self, role: str, detail: str) -> None:
        super().__init__(f"{role} cannot be assigned {detail}")
        self.role = role
        self.detail = detail


class MultipleValuesNotAllowed(ValidationError):
    """More than one id given for a single-value dimension."""

    def __init__(self, role: str, dimension: str) -> None:
        super().__init__(f"{role} supports a single {dimension} assignment")
        self.role = role
        self.dimension = dimension


class ReservedRoleKey(ValidationError):
    """Custom role key collides with a built-in role."""

    def __init__(self, role_key: str) -> None:
        super().__init__(f"Role key '{role_key}' is reserved for a built-in role")
        self.role_key = role_key


class AuthorizationDenied(CampusRBACError):
    """Actor does not have permission for the requested operation."""

    def __init__(self, reason: DenialReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


class NotFound(CampusRBACError):
    """Requested resource was not found."""

    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class PrincipalNotFound(NotFound):
    """Identity could not be resolved to an active principal."""

    def __init__(self, principal_id: object) -> None:
        super().__init__("Principal", principal_id)


class UnknownRole(NotFound):
    """Role key is neither built-in nor registered."""

    def __init__(self, role_key: str) -> None:
        super().__init__("Role", role_key)


class ConflictError(CampusRBACError):
    """Operation conflicts with current state."""

    pass


class DuplicateRoleKey(ConflictError):
    """A role config with this key already exists."""

    def __init__(self, role_key: str) -> None:
        super().__init__(f"A role with key '{role_key}' already exists")
        self.role_key = role_key


class RoleInUse(ConflictError):
    """Role cannot be removed while principals still hold it."""

    def __init__(self, role_key: str, holders: int) -> None:
        super().__init__(
            f"Cannot delete '{role_key}': {holders} principal(s) have this role. "
            "Reassign them to another role first."
        )
        self.role_key = role_key
        self.holders = holders


class BuiltInRoleUndeletable(ConflictError):
    """Built-in roles can be edited but never deleted."""

    def __init__(self, role_key: str) -> None:
        super().__init__(f"Built-in role '{role_key}' cannot be deleted")
        self.role_key = role_key


class IntegrityError(CampusRBACError):
    """An authorization invariant would be violated."""

    pass

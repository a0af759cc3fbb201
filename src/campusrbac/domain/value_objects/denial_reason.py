"""Machine-readable reasons for authorization denials."""

from enum import StrEnum


class DenialReason(StrEnum):
    """Reason codes returned to the transport layer with a denial."""

    ROLE_NOT_ALLOWED = "role_not_allowed"
    PERMISSION_MISSING = "permission_missing"
    MISSING_TARGET_ROLE = "missing_target_role"
    ROLE_NOT_CREATABLE = "role_not_creatable"
    SELF_MANAGEMENT_FORBIDDEN = "self_management_forbidden"
    INSUFFICIENT_SCOPE = "insufficient_scope"

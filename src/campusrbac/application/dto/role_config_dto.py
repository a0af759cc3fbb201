"""Role configuration DTOs."""

from dataclasses import dataclass
from typing import Any

from campusrbac.domain.entities import RoleConfig


@dataclass
class RoleConfigUpdate:
    """Partial update of a role config. ``None`` leaves a field unchanged."""

    label: str | None = None
    description: str | None = None
    permissions: dict[str, Any] | None = None


@dataclass
class RoleConfigUpdateResult:
    """Stored config and how many principals received its permissions."""

    config: RoleConfig
    updated_user_count: int

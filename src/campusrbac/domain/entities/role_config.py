"""RoleConfig entity - stored label/description/permissions for a role."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class RoleConfig:
    """Configuration row for a built-in override or a custom role."""

    role_key: str
    label: str
    description: str
    permissions: dict[str, dict[str, bool]]
    is_custom: bool = False
    updated_at: datetime | None = None

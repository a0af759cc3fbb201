"""Repository ports."""

from campusrbac.application.ports.repositories.principal_repository import (
    PrincipalRepository,
)
from campusrbac.application.ports.repositories.role_config_repository import (
    RoleConfigRepository,
)

__all__ = [
    "PrincipalRepository",
    "RoleConfigRepository",
]

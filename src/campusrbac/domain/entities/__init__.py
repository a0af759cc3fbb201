"""Domain entities."""

from campusrbac.domain.entities.principal import Principal
from campusrbac.domain.entities.role_config import RoleConfig

__all__ = [
    "Principal",
    "RoleConfig",
]

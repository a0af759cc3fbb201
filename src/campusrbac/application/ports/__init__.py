"""Application ports - interfaces for external adapters."""

from campusrbac.application.ports.permission_guard import PermissionGuard
from campusrbac.application.ports.scope_resolver import ScopeResolver
from campusrbac.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionGuard",
    "ScopeResolver",
    "UnitOfWork",
    "UnitOfWorkFactory",
]

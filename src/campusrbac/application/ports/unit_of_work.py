"""Unit of Work port - transactional boundary."""

from collections.abc import AsyncIterator
from typing import Protocol

from campusrbac.application.ports.repositories.principal_repository import (
    PrincipalRepository,
)
from campusrbac.application.ports.repositories.role_config_repository import (
    RoleConfigRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access."""

    @property
    def principals(self) -> PrincipalRepository: ...

    @property
    def role_configs(self) -> RoleConfigRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances."""

    async def __call__(self) -> AsyncIterator[UnitOfWork]: ...

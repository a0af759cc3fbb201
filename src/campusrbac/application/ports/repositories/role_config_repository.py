"""Role config repository port."""

from typing import Protocol

from campusrbac.domain.entities import RoleConfig


class RoleConfigRepository(Protocol):
    """Port for role configuration persistence."""

    async def get(self, role_key: str) -> RoleConfig | None: ...

    async def list_all(self) -> list[RoleConfig]: ...

    async def create(self, config: RoleConfig) -> RoleConfig: ...

    async def upsert(self, config: RoleConfig) -> RoleConfig: ...

    async def delete(self, role_key: str) -> None: ...

"""Principal repository port."""

from typing import Protocol

from campusrbac.domain.entities import Principal
from campusrbac.domain.predicates import Predicate


class PrincipalRepository(Protocol):
    """Port for principal persistence."""

    async def get_by_id(self, principal_id: int) -> Principal | None: ...

    async def get_by_login(self, email: str, username: str) -> Principal | None: ...

    async def list(self, predicate: Predicate, *, include_inactive: bool = False) -> list[Principal]: ...

    async def create(self, principal: Principal) -> Principal: ...

    async def update(self, principal: Principal) -> None: ...

    async def deactivate(self, principal_id: int) -> None: ...

    async def count_by_role(self, role: str) -> int: ...

    async def set_permissions_for_role(
        self, role: str, permissions: dict[str, dict[str, bool]]
    ) -> int: ...

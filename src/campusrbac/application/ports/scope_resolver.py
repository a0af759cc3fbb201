"""Scope resolver port."""

from typing import Protocol

from campusrbac.domain.value_objects import Identity, Scope


class ScopeResolver(Protocol):
    """Port for computing the effective scope of an identity."""

    async def resolve(self, identity: Identity) -> Scope: ...

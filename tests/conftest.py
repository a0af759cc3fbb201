"""Pytest fixtures for campusrbac tests."""

from __future__ import annotations

import copy
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace
from datetime import UTC, datetime

import pytest

from campusrbac.domain.entities import Principal, RoleConfig
from campusrbac.domain.predicates import Predicate
from campusrbac.domain.registry import role_default_permissions
from campusrbac.domain.value_objects import Identity
from campusrbac.infrastructure.permission.permission_guard import RBACPermissionGuard


# --- Fake repositories ---


class FakePrincipalRepository:
    """In-memory principal repository. ``list`` evaluates the predicate per row."""

    def __init__(self) -> None:
        self._by_id: dict[int, Principal] = {}
        self._next_id = 1000

    async def get_by_id(self, principal_id: int) -> Principal | None:
        return self._by_id.get(principal_id)

    async def get_by_login(self, email: str, username: str) -> Principal | None:
        for p in self._by_id.values():
            if p.email == email or p.username == username:
                return p
        return None

    async def list(self, predicate: Predicate, *, include_inactive: bool = False) -> list[Principal]:
        items = [
            p
            for p in self._by_id.values()
            if (include_inactive or p.is_active) and predicate.matches(vars(p))
        ]
        return sorted(items, key=lambda p: p.id)

    async def create(self, principal: Principal) -> Principal:
        self._next_id += 1
        principal.id = self._next_id
        self._by_id[principal.id] = principal
        return principal

    async def update(self, principal: Principal) -> None:
        self._by_id[principal.id] = principal

    async def deactivate(self, principal_id: int) -> None:
        p = self._by_id.get(principal_id)
        if p:
            self._by_id[principal_id] = replace(p, is_active=False)

    async def count_by_role(self, role: str) -> int:
        return sum(1 for p in self._by_id.values() if p.role == role)

    async def set_permissions_for_role(
        self, role: str, permissions: dict[str, dict[str, bool]]
    ) -> int:
        count = 0
        for pid, p in list(self._by_id.items()):
            if p.role == role:
                self._by_id[pid] = replace(p, permissions=copy.deepcopy(permissions))
                count += 1
        return count

    def add(self, principal: Principal) -> Principal:
        """Helper to seed a principal with a fixed id (for tests)."""
        self._by_id[principal.id] = principal
        return principal


class FakeRoleConfigRepository:
    """In-memory role config repository."""

    def __init__(self) -> None:
        self._by_key: dict[str, RoleConfig] = {}

    async def get(self, role_key: str) -> RoleConfig | None:
        return self._by_key.get(role_key)

    async def list_all(self) -> list[RoleConfig]:
        return sorted(self._by_key.values(), key=lambda c: c.role_key)

    async def create(self, config: RoleConfig) -> RoleConfig:
        self._by_key[config.role_key] = config
        return config

    async def upsert(self, config: RoleConfig) -> RoleConfig:
        self._by_key[config.role_key] = config
        return config

    async def delete(self, role_key: str) -> None:
        self._by_key.pop(role_key, None)


class FakeUnitOfWork:
    """In-memory Unit of Work with fake repositories."""

    def __init__(self) -> None:
        self.principals = FakePrincipalRepository()
        self.role_configs = FakeRoleConfigRepository()
        self.commits = 0
        self.rollbacks = 0

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        self.rollbacks += 1


def shared_uow_factory(uow: FakeUnitOfWork):
    """Factory yielding the same UoW on every call; state is restored on error."""

    @asynccontextmanager
    async def _factory() -> AsyncIterator[FakeUnitOfWork]:
        principals = copy.deepcopy(uow.principals._by_id)
        role_configs = copy.deepcopy(uow.role_configs._by_key)
        try:
            yield uow
            await uow.commit()
        except BaseException:
            uow.principals._by_id = principals
            uow.role_configs._by_key = role_configs
            await uow.rollback()
            raise

    return _factory


def make_principal(
    principal_id: int,
    role: str,
    *,
    college_id: int | None = None,
    course_id: int | None = None,
    branch_id: int | None = None,
    permissions: dict | None = None,
    **kwargs,
) -> Principal:
    """Principal with the role's default permissions unless given."""
    now = datetime.now(UTC)
    return Principal(
        id=principal_id,
        name=f"User {principal_id}",
        email=f"user{principal_id}@college.test",
        username=f"user{principal_id}",
        role=role,
        permissions=permissions if permissions is not None else role_default_permissions(role),
        college_id=college_id,
        course_id=course_id,
        branch_id=branch_id,
        created_at=now,
        updated_at=now,
        **kwargs,
    )


def identity_for(principal: Principal) -> Identity:
    return Identity(
        principal_id=principal.id,
        role=principal.role,
        college_id=principal.college_id,
        course_id=principal.course_id,
        branch_id=principal.branch_id,
    )


# --- Fixtures ---


@pytest.fixture
def fake_uow() -> FakeUnitOfWork:
    """Fresh in-memory UnitOfWork seeded with a small college hierarchy.

    1  super_admin
    10 college_principal of college 1 (all courses, all branches)
    11 college_principal of college 2 (all courses, all branches)
    20 college_ao of college 1
    30 course_principal of college 1, course 5
    40 branch_hod of college 1, course 5, branch 9
    50 cashier of college 1
    """
    uow = FakeUnitOfWork()
    repo = uow.principals
    repo.add(make_principal(1, "super_admin"))
    repo.add(make_principal(10, "college_principal", college_id=1, all_courses=True, all_branches=True))
    repo.add(make_principal(11, "college_principal", college_id=2, all_courses=True, all_branches=True))
    repo.add(make_principal(20, "college_ao", college_id=1, all_courses=True, all_branches=True))
    repo.add(make_principal(30, "course_principal", college_id=1, course_id=5, all_branches=True))
    repo.add(make_principal(40, "branch_hod", college_id=1, course_id=5, branch_id=9))
    repo.add(make_principal(50, "cashier", college_id=1))
    return uow


@pytest.fixture
def uow_factory(fake_uow: FakeUnitOfWork):
    """Factory returning async context manager over the shared FakeUnitOfWork."""
    return shared_uow_factory(fake_uow)


@pytest.fixture
def guard(uow_factory) -> RBACPermissionGuard:
    return RBACPermissionGuard(uow_factory)


@pytest.fixture
def identities(fake_uow: FakeUnitOfWork) -> dict[int, Identity]:
    """Identity per seeded principal id."""
    return {pid: identity_for(p) for pid, p in fake_uow.principals._by_id.items()}


@pytest.fixture
def mock_permission_guard():
    """AsyncMock for PermissionGuard - authorizes every operation with unrestricted scope."""
    from unittest.mock import AsyncMock

    from campusrbac.application.dto.authorization import AuthorizationContext, GuardState
    from campusrbac.domain.value_objects import Scope

    async def _authorize(identity, **kwargs):
        return AuthorizationContext(
            identity=identity,
            scope=Scope.unrestricted_scope(),
            state=GuardState.AUTHORIZED,
        )

    mock = AsyncMock()
    mock.authorize = AsyncMock(side_effect=_authorize)
    return mock

"""PostgreSQL role config repository implementation."""

from typing import Any

from psycopg import AsyncConnection
from psycopg.errors import UniqueViolation
from psycopg.types.json import Jsonb

from campusrbac.domain.entities import RoleConfig
from campusrbac.domain.exceptions import DuplicateRoleKey

_COLUMNS = "role_key, label, description, permissions, is_custom, updated_at"


def _row_to_config(r: tuple[Any, ...]) -> RoleConfig:
    return RoleConfig(
        role_key=r[0],
        label=r[1],
        description=r[2] or "",
        permissions=r[3] or {},
        is_custom=r[4],
        updated_at=r[5],
    )


class PostgresRoleConfigRepository:
    """Role config repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, role_key: str) -> RoleConfig | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role_config WHERE role_key = %s",
            (role_key,),
        )
        r = await cur.fetchone()
        return _row_to_config(r) if r else None

    async def list_all(self) -> list[RoleConfig]:
        cur = await self._conn.execute(f"SELECT {_COLUMNS} FROM role_config ORDER BY role_key")
        rows = await cur.fetchall()
        return [_row_to_config(r) for r in rows]

    async def create(self, config: RoleConfig) -> RoleConfig:
        """Insert a new config; a concurrent insert of the same key is a duplicate."""
        try:
            await self._conn.execute(
                f"INSERT INTO role_config ({_COLUMNS}) "
                "VALUES (%s, %s, %s, %s, %s, COALESCE(%s, now()))",
                (
                    config.role_key,
                    config.label,
                    config.description,
                    Jsonb(config.permissions),
                    config.is_custom,
                    config.updated_at,
                ),
            )
        except UniqueViolation as e:
            raise DuplicateRoleKey(config.role_key) from e
        return config

    async def upsert(self, config: RoleConfig) -> RoleConfig:
        await self._conn.execute(
            f"INSERT INTO role_config ({_COLUMNS}) "
            "VALUES (%s, %s, %s, %s, %s, COALESCE(%s, now())) "
            "ON CONFLICT (role_key) DO UPDATE SET "
            "label = EXCLUDED.label, description = EXCLUDED.description, "
            "permissions = EXCLUDED.permissions, updated_at = EXCLUDED.updated_at",
            (
                config.role_key,
                config.label,
                config.description,
                Jsonb(config.permissions),
                config.is_custom,
                config.updated_at,
            ),
        )
        return config

    async def delete(self, role_key: str) -> None:
        await self._conn.execute(
            "DELETE FROM role_config WHERE role_key = %s",
            (role_key,),
        )

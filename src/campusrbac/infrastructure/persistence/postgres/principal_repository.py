"""PostgreSQL principal repository implementation."""

from typing import Any

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from campusrbac.domain.entities import Principal
from campusrbac.domain.predicates import Predicate

_COLUMNS = (
    "p.id, p.name, p.email, p.username, p.role, p.permissions, "
    "p.college_id, p.course_id, p.branch_id, p.college_ids, p.course_ids, p.branch_ids, "
    "p.all_courses, p.all_branches, p.is_active, p.created_by, p.created_at, p.updated_at"
)


def _row_to_principal(r: tuple[Any, ...]) -> Principal:
    return Principal(
        id=r[0],
        name=r[1],
        email=r[2],
        username=r[3],
        role=r[4],
        permissions=r[5] or {},
        college_id=r[6],
        course_id=r[7],
        branch_id=r[8],
        college_ids=list(r[9] or []),
        course_ids=list(r[10] or []),
        branch_ids=list(r[11] or []),
        all_courses=r[12],
        all_branches=r[13],
        is_active=r[14],
        created_by=r[15],
        created_at=r[16],
        updated_at=r[17],
    )


class PostgresPrincipalRepository:
    """Principal repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, principal_id: int) -> Principal | None:
        """Get principal by id, active or not."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM principal p WHERE p.id = %s",
            (principal_id,),
        )
        r = await cur.fetchone()
        return _row_to_principal(r) if r else None

    async def get_by_login(self, email: str, username: str) -> Principal | None:
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM principal p WHERE p.email = %s OR p.username = %s LIMIT 1",
            (email, username),
        )
        r = await cur.fetchone()
        return _row_to_principal(r) if r else None

    async def list(self, predicate: Predicate, *, include_inactive: bool = False) -> list[Principal]:
        """List principals matching a compiled scope predicate."""
        fragment, params = predicate.to_sql()
        conditions = [fragment]
        if not include_inactive:
            conditions.append("p.is_active")
        q = f"SELECT {_COLUMNS} FROM principal p WHERE {' AND '.join(conditions)} ORDER BY p.id"
        cur = await self._conn.execute(q, tuple(params))
        rows = await cur.fetchall()
        return [_row_to_principal(r) for r in rows]

    async def create(self, principal: Principal) -> Principal:
        """Insert principal; the store assigns the id."""
        cur = await self._conn.execute(
            "INSERT INTO principal (name, email, username, role, permissions, "
            "college_id, course_id, branch_id, college_ids, course_ids, branch_ids, "
            "all_courses, all_branches, is_active, created_by, created_at, updated_at) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, "
            "COALESCE(%s, now()), COALESCE(%s, now())) "
            "RETURNING id, created_at, updated_at",
            (
                principal.name,
                principal.email,
                principal.username,
                principal.role,
                Jsonb(principal.permissions),
                principal.college_id,
                principal.course_id,
                principal.branch_id,
                principal.college_ids,
                principal.course_ids,
                principal.branch_ids,
                principal.all_courses,
                principal.all_branches,
                principal.is_active,
                principal.created_by,
                principal.created_at,
                principal.updated_at,
            ),
        )
        r = await cur.fetchone()
        principal.id, principal.created_at, principal.updated_at = r[0], r[1], r[2]
        return principal

    async def update(self, principal: Principal) -> None:
        """Update role, permissions and scope assignment."""
        await self._conn.execute(
            "UPDATE principal SET name = %s, role = %s, permissions = %s, "
            "college_id = %s, course_id = %s, branch_id = %s, "
            "college_ids = %s, course_ids = %s, branch_ids = %s, "
            "all_courses = %s, all_branches = %s, is_active = %s, updated_at = now() "
            "WHERE id = %s",
            (
                principal.name,
                principal.role,
                Jsonb(principal.permissions),
                principal.college_id,
                principal.course_id,
                principal.branch_id,
                principal.college_ids,
                principal.course_ids,
                principal.branch_ids,
                principal.all_courses,
                principal.all_branches,
                principal.is_active,
                principal.id,
            ),
        )

    async def deactivate(self, principal_id: int) -> None:
        await self._conn.execute(
            "UPDATE principal SET is_active = FALSE, updated_at = now() WHERE id = %s",
            (principal_id,),
        )

    async def count_by_role(self, role: str) -> int:
        """Count holders of a role, inactive ones included."""
        cur = await self._conn.execute(
            "SELECT COUNT(*) FROM principal WHERE role = %s",
            (role,),
        )
        r = await cur.fetchone()
        return r[0] if r else 0

    async def set_permissions_for_role(
        self, role: str, permissions: dict[str, dict[str, bool]]
    ) -> int:
        """Overwrite the permissions of every holder of ``role``. Returns rows touched."""
        cur = await self._conn.execute(
            "UPDATE principal SET permissions = %s, updated_at = now() WHERE role = %s",
            (Jsonb(permissions), role),
        )
        return cur.rowcount

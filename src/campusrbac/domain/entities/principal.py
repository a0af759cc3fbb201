"""Principal entity - an administrative user account."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Principal:
    """Administrative account with a role, scope assignment and permission set.

    ``college_id``/``course_id``/``branch_id`` are the primary assignment;
    the ``*_ids`` lists hold multi-value assignments for roles that allow them.
    """

    id: int
    name: str
    email: str
    username: str
    role: str
    permissions: dict[str, dict[str, bool]]
    college_id: int | None = None
    course_id: int | None = None
    branch_id: int | None = None
    college_ids: list[int] = field(default_factory=list)
    course_ids: list[int] = field(default_factory=list)
    branch_ids: list[int] = field(default_factory=list)
    all_courses: bool = False
    all_branches: bool = False
    is_active: bool = True
    created_by: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_public_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "username": self.username,
            "role": self.role,
            "college_id": self.college_id,
            "course_id": self.course_id,
            "branch_id": self.branch_id,
            "college_ids": list(self.college_ids),
            "course_ids": list(self.course_ids),
            "branch_ids": list(self.branch_ids),
            "all_courses": self.all_courses,
            "all_branches": self.all_branches,
            "permissions": self.permissions,
            "is_active": self.is_active,
        }

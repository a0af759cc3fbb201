"""Principal DTOs."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class ScopeAssignmentInput:
    """Scope fields as submitted on create/update."""

    college_id: int | None = None
    course_id: int | None = None
    branch_id: int | None = None
    college_ids: list[int] = field(default_factory=list)
    course_ids: list[int] = field(default_factory=list)
    branch_ids: list[int] = field(default_factory=list)
    all_courses: bool = False
    all_branches: bool = False

    def normalized(self) -> tuple[list[int], list[int], list[int]]:
        """Multi-value lists, falling back to the primary value when empty."""

        def fold(ids: list[int], primary: int | None) -> list[int]:
            if ids:
                return list(dict.fromkeys(ids))
            return [primary] if primary is not None else []

        return (
            fold(self.college_ids, self.college_id),
            fold(self.course_ids, self.course_id),
            fold(self.branch_ids, self.branch_id),
        )


@dataclass
class PrincipalCreateInput:
    """Input for provisioning a principal."""

    name: str
    email: str
    username: str
    role: str
    scope: ScopeAssignmentInput = field(default_factory=ScopeAssignmentInput)
    permissions: dict[str, Any] | None = None


@dataclass
class PrincipalUpdateInput:
    """Partial update of a principal; ``None`` leaves a field unchanged."""

    name: str | None = None
    role: str | None = None
    permissions: dict[str, Any] | None = None
    is_active: bool | None = None

    def is_empty(self) -> bool:
        return self.name is None and self.role is None and self.permissions is None and self.is_active is None

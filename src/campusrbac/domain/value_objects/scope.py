"""Scope - the colleges/courses/branches an actor may act on."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Scope:
    """Effective data scope of one principal for one operation.

    When ``unrestricted`` is set every other field is ignored. ``all_courses``
    and ``all_branches`` lift filtering on that dimension; the id sets are
    still carried as assignment information.
    """

    college_ids: frozenset[int] = frozenset()
    course_ids: frozenset[int] = frozenset()
    branch_ids: frozenset[int] = frozenset()
    all_courses: bool = False
    all_branches: bool = False
    unrestricted: bool = False

    @classmethod
    def unrestricted_scope(cls) -> "Scope":
        return cls(unrestricted=True)

    def to_dict(self) -> dict[str, object]:
        return {
            "unrestricted": self.unrestricted,
            "college_ids": sorted(self.college_ids),
            "course_ids": sorted(self.course_ids),
            "branch_ids": sorted(self.branch_ids),
            "all_courses": self.all_courses,
            "all_branches": self.all_branches,
        }

    def describe(self) -> str:
        """Short human-readable summary for logs."""
        if self.unrestricted:
            return "unrestricted"
        parts = [f"colleges={sorted(self.college_ids)}"]
        parts.append("courses=all" if self.all_courses else f"courses={sorted(self.course_ids)}")
        parts.append("branches=all" if self.all_branches else f"branches={sorted(self.branch_ids)}")
        return " ".join(parts)


@dataclass(frozen=True)
class EntityDimensions:
    """Scope columns carried by a target entity.

    A column of ``None`` means the entity has no such dimension. Nullable
    course/branch columns treat NULL as "applies to every course/branch".
    """

    college: str | None = None
    course: str | None = None
    branch: str | None = None
    course_nullable: bool = False
    branch_nullable: bool = False

    @property
    def is_scoped(self) -> bool:
        return any(c is not None for c in (self.college, self.course, self.branch))

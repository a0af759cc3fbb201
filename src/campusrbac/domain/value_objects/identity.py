"""Identity handed over by the authentication boundary."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Identity:
    """Verified caller identity.

    Only ``principal_id`` and ``role`` are guaranteed. The cached scope and
    permission claims come from the login token and may be stale; they are
    kept for display purposes and never used for authorization decisions.
    """

    principal_id: int
    role: str
    college_id: int | None = None
    course_id: int | None = None
    branch_id: int | None = None
    permissions: dict[str, Any] | None = field(default=None, compare=False)

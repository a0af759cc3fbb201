"""Role labels and the creation hierarchy."""

from collections.abc import Mapping
from types import MappingProxyType

from campusrbac.domain.exceptions import IntegrityError
from campusrbac.domain.value_objects import LEGACY_ADMIN_ROLE, BuiltInRole, Dimension

TOP_LEVEL_ROLE = BuiltInRole.SUPER_ADMIN

ROLE_LABELS = MappingProxyType({
    BuiltInRole.SUPER_ADMIN: "Super Admin",
    BuiltInRole.COLLEGE_PRINCIPAL: "College Principal",
    BuiltInRole.COLLEGE_AO: "College AO",
    BuiltInRole.COURSE_PRINCIPAL: "Course Principal",
    BuiltInRole.COURSE_AO: "Course AO",
    BuiltInRole.BRANCH_HOD: "Branch HOD",
    BuiltInRole.COLLEGE_ATTENDER: "College Attender",
    BuiltInRole.OFFICE_ASSISTANT: "Office Assistant",
    BuiltInRole.CASHIER: "Cashier",
})

ROLE_DESCRIPTIONS = MappingProxyType({
    BuiltInRole.SUPER_ADMIN: "Unrestricted access to every college and module",
    BuiltInRole.COLLEGE_PRINCIPAL: (
        "Manages overall college operations and has oversight of all programs and branches"
    ),
    BuiltInRole.COLLEGE_AO: (
        "Administrative officer responsible for college-level operations and record management"
    ),
    BuiltInRole.COURSE_PRINCIPAL: "Course-level principal for academic operations",
    BuiltInRole.COURSE_AO: "Administrative officer for a single course",
    BuiltInRole.BRANCH_HOD: (
        "Head of Department with control over specific branches and their operations"
    ),
    BuiltInRole.COLLEGE_ATTENDER: "Basic access for attendance tracking and daily record management",
    BuiltInRole.OFFICE_ASSISTANT: (
        "Assists with office operations, document management, and administrative tasks"
    ),
    BuiltInRole.CASHIER: "Handles fee collection, payment processing, and financial transactions",
})

ROLE_HIERARCHY: Mapping[str, frozenset[str]] = MappingProxyType({
    BuiltInRole.SUPER_ADMIN: frozenset(r for r in BuiltInRole if r is not BuiltInRole.SUPER_ADMIN),
    BuiltInRole.COLLEGE_PRINCIPAL: frozenset({
        BuiltInRole.COLLEGE_AO,
        BuiltInRole.COURSE_PRINCIPAL,
        BuiltInRole.COURSE_AO,
        BuiltInRole.BRANCH_HOD,
        BuiltInRole.COLLEGE_ATTENDER,
        BuiltInRole.OFFICE_ASSISTANT,
        BuiltInRole.CASHIER,
    }),
    BuiltInRole.COLLEGE_AO: frozenset({
        BuiltInRole.COLLEGE_ATTENDER,
        BuiltInRole.OFFICE_ASSISTANT,
        BuiltInRole.CASHIER,
    }),
    BuiltInRole.COURSE_PRINCIPAL: frozenset({BuiltInRole.COURSE_AO, BuiltInRole.BRANCH_HOD}),
    BuiltInRole.COURSE_AO: frozenset(),
    BuiltInRole.BRANCH_HOD: frozenset(),
    BuiltInRole.COLLEGE_ATTENDER: frozenset(),
    BuiltInRole.OFFICE_ASSISTANT: frozenset(),
    BuiltInRole.CASHIER: frozenset(),
})

# Which scope field a manager must share with the principals it manages.
MANAGEMENT_TIERS = MappingProxyType({
    BuiltInRole.COLLEGE_PRINCIPAL: Dimension.COLLEGE,
    BuiltInRole.COLLEGE_AO: Dimension.COLLEGE,
    BuiltInRole.COURSE_PRINCIPAL: Dimension.COURSE,
})


def normalize_role(role: str) -> str:
    """Map the legacy admin alias onto the top-level role."""
    return TOP_LEVEL_ROLE.value if role == LEGACY_ADMIN_ROLE else role


def is_top_level_role(role: str | None) -> bool:
    return role is not None and normalize_role(role) == TOP_LEVEL_ROLE


def is_built_in_role(role: str) -> bool:
    return role in ROLE_HIERARCHY


def is_reserved_role_key(role_key: str) -> bool:
    """Keys a custom role may not take."""
    return is_built_in_role(role_key) or role_key == LEGACY_ADMIN_ROLE


def creatable_roles(role: str) -> frozenset[str]:
    """Roles that ``role`` may provision. Unknown and custom roles create nothing."""
    return ROLE_HIERARCHY.get(normalize_role(role), frozenset())


def can_create_role(creator: str, target: str) -> bool:
    return target in creatable_roles(creator)


def role_label(role: str) -> str:
    return ROLE_LABELS.get(role, role)


def _assert_acyclic(hierarchy: Mapping[str, frozenset[str]]) -> None:
    visiting: set[str] = set()
    done: set[str] = set()

    def visit(role: str) -> None:
        if role in done:
            return
        if role in visiting:
            raise IntegrityError(f"Role hierarchy contains a cycle through '{role}'")
        visiting.add(role)
        for child in hierarchy.get(role, frozenset()):
            visit(child)
        visiting.discard(role)
        done.add(role)

    for role in hierarchy:
        visit(role)


_assert_acyclic(ROLE_HIERARCHY)

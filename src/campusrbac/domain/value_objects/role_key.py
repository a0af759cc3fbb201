"""Built-in role keys."""

from enum import StrEnum


class BuiltInRole(StrEnum):
    """Roles shipped with the application. Custom roles live in role_config."""

    SUPER_ADMIN = "super_admin"
    COLLEGE_PRINCIPAL = "college_principal"
    COLLEGE_AO = "college_ao"
    COURSE_PRINCIPAL = "course_principal"
    COURSE_AO = "course_ao"
    BRANCH_HOD = "branch_hod"
    COLLEGE_ATTENDER = "college_attender"
    OFFICE_ASSISTANT = "office_assistant"
    CASHIER = "cashier"


# Pre-RBAC admin accounts still carry this role in older tokens.
LEGACY_ADMIN_ROLE = "admin"

"""Module/action schema of the permission matrix."""

from types import MappingProxyType

from campusrbac.domain.value_objects import Module

# Ordered per module; actions are not uniform across modules.
MODULE_ACTIONS = MappingProxyType({
    Module.DASHBOARD: ("view",),
    Module.PRE_REGISTRATION: ("add_student", "bulk_upload", "approve", "reject"),
    Module.STUDENT_MANAGEMENT: (
        "view",
        "add_student",
        "bulk_upload",
        "edit_student",
        "delete_student",
        "update_pin",
        "export",
    ),
    Module.PROMOTIONS: ("view", "manage"),
    Module.ATTENDANCE: ("view", "mark", "download"),
    Module.FEE_MANAGEMENT: ("view", "write"),
    Module.SETTINGS: ("view", "edit"),
    Module.USER_MANAGEMENT: ("view", "control"),
    Module.REPORTS: ("view", "download"),
})

MODULE_LABELS = MappingProxyType({
    Module.DASHBOARD: "Dashboard",
    Module.PRE_REGISTRATION: "Self Registration",
    Module.STUDENT_MANAGEMENT: "Student Management",
    Module.PROMOTIONS: "Promotions",
    Module.ATTENDANCE: "Attendance",
    Module.FEE_MANAGEMENT: "Fee Management",
    Module.SETTINGS: "Settings",
    Module.USER_MANAGEMENT: "User Management",
    Module.REPORTS: "Reports",
})

ACTION_LABELS = MappingProxyType({
    Module.DASHBOARD: {"view": "View Dashboard"},
    Module.PRE_REGISTRATION: {
        "add_student": "Add Student",
        "bulk_upload": "Bulk Upload",
        "approve": "Approve Submissions",
        "reject": "Reject Submissions",
    },
    Module.STUDENT_MANAGEMENT: {
        "view": "View Students",
        "add_student": "Add Student",
        "bulk_upload": "Bulk Upload",
        "edit_student": "Edit Students",
        "delete_student": "Delete Students",
        "update_pin": "Update PIN Number",
        "export": "Export Students",
    },
    Module.PROMOTIONS: {"view": "View Promotions", "manage": "Manage Promotions"},
    Module.ATTENDANCE: {
        "view": "View Attendance",
        "mark": "Mark Attendance",
        "download": "Download Reports",
    },
    Module.FEE_MANAGEMENT: {"view": "View Fees", "write": "Manage Fees"},
    Module.SETTINGS: {"view": "View Settings", "edit": "Edit Settings"},
    Module.USER_MANAGEMENT: {"view": "View Users", "control": "Manage Users"},
    Module.REPORTS: {"view": "View Reports", "download": "Download Reports"},
})


def module_actions(module: str) -> tuple[str, ...]:
    """Recognised actions for a module, empty for unknown modules."""
    return MODULE_ACTIONS.get(module, ())

"""Functional modules guarded by the permission matrix."""

from enum import StrEnum


class Module(StrEnum):
    """Module keys as stored in permission sets."""

    DASHBOARD = "dashboard"
    PRE_REGISTRATION = "pre_registration"
    STUDENT_MANAGEMENT = "student_management"
    PROMOTIONS = "promotions"
    ATTENDANCE = "attendance"
    FEE_MANAGEMENT = "fee_management"
    SETTINGS = "settings"
    USER_MANAGEMENT = "user_management"
    REPORTS = "reports"

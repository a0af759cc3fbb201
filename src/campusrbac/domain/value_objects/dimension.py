"""Scope dimensions."""

from enum import StrEnum


class Dimension(StrEnum):
    """Organisational levels a scope can narrow on."""

    COLLEGE = "college"
    COURSE = "course"
    BRANCH = "branch"

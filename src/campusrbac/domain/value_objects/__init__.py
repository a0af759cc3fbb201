"""Domain value objects."""

from campusrbac.domain.value_objects.denial_reason import DenialReason
from campusrbac.domain.value_objects.dimension import Dimension
from campusrbac.domain.value_objects.identity import Identity
from campusrbac.domain.value_objects.module_key import Module
from campusrbac.domain.value_objects.role_key import LEGACY_ADMIN_ROLE, BuiltInRole
from campusrbac.domain.value_objects.scope import EntityDimensions, Scope

__all__ = [
    "BuiltInRole",
    "DenialReason",
    "Dimension",
    "EntityDimensions",
    "Identity",
    "LEGACY_ADMIN_ROLE",
    "Module",
    "Scope",
]

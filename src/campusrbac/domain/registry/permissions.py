"""Permission sets: defaults, parsing of stored data and lookups.

A permission set maps module key -> action -> bool and is total over the
module/action schema in ``modules.MODULE_ACTIONS`` once materialised. Stored
sets come in two shapes:

* current: ``{"attendance": {"view": true, "mark": false, "download": false}}``
* legacy:  ``{"attendance": {"read": true, "write": false}}``

Both are normalised by :func:`parse_permissions` into the current shape.
"""

import json
import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from campusrbac.domain.registry.modules import MODULE_ACTIONS, module_actions
from campusrbac.domain.registry.roles import is_top_level_role
from campusrbac.domain.value_objects import BuiltInRole, Module

logger = logging.getLogger(__name__)

PermissionSet = dict[str, dict[str, bool]]

LEGACY_KEYS = frozenset({"read", "write"})

# Static grants for built-in roles before any role config override.
_BUILT_IN_GRANTS = MappingProxyType({
    BuiltInRole.COLLEGE_PRINCIPAL: {
        Module.DASHBOARD: ("view",),
        Module.STUDENT_MANAGEMENT: ("view", "export"),
        Module.ATTENDANCE: ("view", "download"),
        Module.REPORTS: ("view", "download"),
        Module.USER_MANAGEMENT: ("view",),
    },
    BuiltInRole.COLLEGE_AO: {
        Module.DASHBOARD: ("view",),
        Module.STUDENT_MANAGEMENT: ("view",),
        Module.ATTENDANCE: ("view",),
    },
    BuiltInRole.COURSE_PRINCIPAL: {
        Module.DASHBOARD: ("view",),
        Module.STUDENT_MANAGEMENT: ("view",),
        Module.ATTENDANCE: ("view", "download"),
        Module.REPORTS: ("view",),
    },
    BuiltInRole.COURSE_AO: {
        Module.DASHBOARD: ("view",),
        Module.STUDENT_MANAGEMENT: ("view",),
    },
    BuiltInRole.BRANCH_HOD: {
        Module.DASHBOARD: ("view",),
        Module.STUDENT_MANAGEMENT: ("view",),
        Module.ATTENDANCE: ("view", "mark"),
    },
    BuiltInRole.COLLEGE_ATTENDER: {
        Module.DASHBOARD: ("view",),
        Module.ATTENDANCE: ("view", "mark"),
    },
    BuiltInRole.OFFICE_ASSISTANT: {
        Module.DASHBOARD: ("view",),
        Module.PRE_REGISTRATION: ("add_student",),
    },
    BuiltInRole.CASHIER: {
        Module.DASHBOARD: ("view",),
        Module.FEE_MANAGEMENT: ("view", "write"),
    },
})


def _filled(value: bool) -> PermissionSet:
    return {str(module): {action: value for action in actions} for module, actions in MODULE_ACTIONS.items()}


def default_permissions() -> PermissionSet:
    """Every action of every module denied."""
    return _filled(False)


def elevated_permissions() -> PermissionSet:
    """Every action of every module granted. Reserved for the top-level role."""
    return _filled(True)


def role_default_permissions(role: str) -> PermissionSet:
    """Static default set for a built-in role; all denied for anything else."""
    if is_top_level_role(role):
        return elevated_permissions()
    permissions = default_permissions()
    for module, actions in _BUILT_IN_GRANTS.get(role, {}).items():
        for action in actions:
            permissions[module][action] = True
    return permissions


def _is_legacy_entry(module: str, entry: Mapping[str, Any]) -> bool:
    keys = set(entry)
    return bool(keys) and keys <= LEGACY_KEYS and not keys <= set(module_actions(module))


def parse_permissions(raw: object) -> PermissionSet:
    """Normalise stored or submitted permission data into a total set.

    Accepts a mapping or its JSON text, in either the current or the legacy
    read/write shape. Legacy entries with any access grant every action of
    their module. Unknown modules and actions are dropped, missing ones are
    denied, and only a literal ``True`` grants. Never raises: anything
    unparseable yields :func:`default_permissions`.
    """
    permissions = default_permissions()
    if raw is None or raw == "":
        return permissions

    data = raw
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("Unparseable permission data, falling back to defaults")
            return permissions

    if not isinstance(data, Mapping):
        logger.warning("Permission data is %s, not a mapping; using defaults", type(data).__name__)
        return permissions

    for module, entry in data.items():
        actions = module_actions(module)
        if not actions or not isinstance(entry, Mapping):
            continue
        if _is_legacy_entry(module, entry):
            granted = entry.get("read") is True or entry.get("write") is True
            logger.debug("Migrating legacy permissions for module %s (granted=%s)", module, granted)
            permissions[module] = {action: granted for action in actions}
            continue
        for action in actions:
            permissions[module][action] = entry.get(action) is True
    return permissions


def has_permission(permissions: Mapping[str, Mapping[str, bool]] | None, module: str, action: str) -> bool:
    """Exact lookup of ``module.action``.

    If ``action`` is not part of the module's current schema, the answer is
    whether the module grants any action at all. Sets serialised before an
    action was added keep working through this rule.
    """
    if not isinstance(permissions, Mapping):
        return False
    entry = permissions.get(module)
    if not isinstance(entry, Mapping) or module not in MODULE_ACTIONS:
        return False
    if action in module_actions(module):
        return entry.get(action) is True
    return any(value is True for value in entry.values())


def has_module_access(permissions: Mapping[str, Mapping[str, bool]] | None, module: str) -> bool:
    if not isinstance(permissions, Mapping):
        return False
    entry = permissions.get(module)
    if not isinstance(entry, Mapping):
        return False
    return any(value is True for value in entry.values())

"""Keycloak OIDC provider for token introspection."""

import logging
from typing import Any

from keycloak import KeycloakOpenID
from keycloak.exceptions import KeycloakError

from campusrbac.domain.registry import is_built_in_role, normalize_role
from campusrbac.domain.value_objects import LEGACY_ADMIN_ROLE, Identity

logger = logging.getLogger(__name__)


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def identity_from_claims(claims: dict[str, Any]) -> Identity | None:
    """Build an Identity from introspected token claims.

    ``principal_id`` and ``role`` are custom claims; when ``role`` is absent the
    first realm role naming a known role is used. Scope and permission claims
    are carried for display only.
    """
    principal_id = claims.get("principal_id")
    role = claims.get("role")
    if not role:
        realm_roles = (claims.get("realm_access") or {}).get("roles") or []
        role = next(
            (r for r in realm_roles if is_built_in_role(r) or r == LEGACY_ADMIN_ROLE),
            None,
        )
    if principal_id is None or not role:
        return None
    try:
        return Identity(
            principal_id=int(principal_id),
            role=normalize_role(role),
            college_id=_optional_int(claims.get("college_id")),
            course_id=_optional_int(claims.get("course_id")),
            branch_id=_optional_int(claims.get("branch_id")),
            permissions=claims.get("permissions"),
        )
    except (TypeError, ValueError):
        logger.warning("Malformed identity claims for subject %s", claims.get("sub"))
        return None


class KeycloakProvider:
    """Keycloak OIDC - validates tokens and extracts the caller identity."""

    def __init__(
        self,
        server_url: str,
        realm: str,
        client_id: str,
        client_secret: str = "",
    ) -> None:
        self._keycloak = KeycloakOpenID(
            server_url=server_url,
            realm_name=realm,
            client_id=client_id,
            client_secret_key=client_secret,
        )

    def decode_token(self, token: str) -> Identity | None:
        """Introspect token, return identity or None if inactive or invalid."""
        try:
            token_info = self._keycloak.introspect(token)
        except KeycloakError as e:
            logger.warning("Token introspection failed: %s", e)
            return None
        if not token_info.get("active"):
            return None
        return identity_from_claims(token_info)

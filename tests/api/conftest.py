"""Fixtures for API tests."""

import pytest

from campusrbac.application.use_cases.principal.create_principal import CreatePrincipalUseCase
from campusrbac.application.use_cases.principal.deactivate_principal import DeactivatePrincipalUseCase
from campusrbac.application.use_cases.principal.get_principal import GetPrincipalUseCase
from campusrbac.application.use_cases.principal.list_principals import ListPrincipalsUseCase
from campusrbac.application.use_cases.principal.update_principal import UpdatePrincipalUseCase
from campusrbac.application.use_cases.principal.update_principal_scope import UpdatePrincipalScopeUseCase
from campusrbac.application.use_cases.role_config.create_custom_role import CreateCustomRoleUseCase
from campusrbac.application.use_cases.role_config.delete_custom_role import DeleteCustomRoleUseCase
from campusrbac.application.use_cases.role_config.get_role_config import (
    GetEffectivePermissionsUseCase,
    GetRoleConfigUseCase,
    ListRoleConfigsUseCase,
)
from campusrbac.application.use_cases.role_config.list_available_roles import ListAvailableRolesUseCase
from campusrbac.application.use_cases.role_config.update_role_config import UpdateRoleConfigUseCase
from campusrbac.domain.value_objects import Identity
from campusrbac.infrastructure.permission.scope_resolver import StoreScopeResolver
from campusrbac.interfaces.api.app import create_app
from campusrbac.interfaces.api.resources.catalog import CatalogResource
from campusrbac.interfaces.api.resources.health import HealthResource
from campusrbac.interfaces.api.resources.principals import (
    PrincipalResource,
    PrincipalScopeResource,
    PrincipalsResource,
)
from campusrbac.interfaces.api.resources.role_configs import (
    RoleConfigPermissionsResource,
    RoleConfigResource,
    RoleConfigsResource,
)
from campusrbac.interfaces.api.resources.scope import ScopeResource


class AuthBypassMiddleware:
    """Middleware that sets context.identity from the X-Principal-Id header for testing."""

    def __init__(self, identities: dict[int, Identity]) -> None:
        self._identities = identities

    async def process_request(self, req, resp):
        principal_id = req.get_header("X-Principal-Id")
        if principal_id is None:
            req.context.identity = None
            return
        pid = int(principal_id)
        req.context.identity = self._identities.get(pid) or Identity(principal_id=pid, role="cashier")


@pytest.fixture
def app(uow_factory, guard, identities):
    """Falcon ASGI app wired to the in-memory store."""
    deps = {"unit_of_work_factory": uow_factory, "permission_guard": guard}
    return create_app(
        middleware=[AuthBypassMiddleware(identities)],
        health_resource=HealthResource(),
        catalog_resource=CatalogResource(ListAvailableRolesUseCase(**deps)),
        role_configs_resource=RoleConfigsResource(
            ListRoleConfigsUseCase(**deps), CreateCustomRoleUseCase(**deps)
        ),
        role_config_resource=RoleConfigResource(
            GetRoleConfigUseCase(**deps),
            UpdateRoleConfigUseCase(**deps),
            DeleteCustomRoleUseCase(**deps),
        ),
        role_config_permissions_resource=RoleConfigPermissionsResource(GetEffectivePermissionsUseCase(**deps)),
        principals_resource=PrincipalsResource(
            ListPrincipalsUseCase(**deps), CreatePrincipalUseCase(**deps)
        ),
        principal_resource=PrincipalResource(
            GetPrincipalUseCase(**deps),
            UpdatePrincipalUseCase(**deps),
            DeactivatePrincipalUseCase(**deps),
        ),
        principal_scope_resource=PrincipalScopeResource(UpdatePrincipalScopeUseCase(**deps)),
        scope_resource=ScopeResource(StoreScopeResolver(uow_factory)),
    )


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    from falcon.testing import TestClient
    return TestClient(app)

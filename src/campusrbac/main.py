"""Application entry point and composition root."""

import logging

import uvicorn

from campusrbac import __version__
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
from campusrbac.config import configure_logging, get_settings
from campusrbac.infrastructure.auth.keycloak_provider import KeycloakProvider
from campusrbac.infrastructure.permission.permission_guard import RBACPermissionGuard
from campusrbac.infrastructure.permission.scope_resolver import StoreScopeResolver
from campusrbac.infrastructure.persistence.postgres.connection import create_pool
from campusrbac.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from campusrbac.interfaces.api.app import create_app
from campusrbac.interfaces.api.middleware.auth import AuthMiddleware
from campusrbac.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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

logger = logging.getLogger(__name__)


def create_campusrbac_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings.log_level)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("No Keycloak client secret configured; every request is unauthenticated")

    guard = RBACPermissionGuard(uow_factory)

    return create_app(
        middleware=[
            PoolLifespanMiddleware(pool),
            AuthMiddleware(keycloak),
        ],
        health_resource=HealthResource(),
        catalog_resource=CatalogResource(
            ListAvailableRolesUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
        ),
        role_configs_resource=RoleConfigsResource(
            ListRoleConfigsUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
            CreateCustomRoleUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
        ),
        role_config_resource=RoleConfigResource(
            GetRoleConfigUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
            UpdateRoleConfigUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
            DeleteCustomRoleUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
        ),
        role_config_permissions_resource=RoleConfigPermissionsResource(
            GetEffectivePermissionsUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
        ),
        principals_resource=PrincipalsResource(
            ListPrincipalsUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
            CreatePrincipalUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
        ),
        principal_resource=PrincipalResource(
            GetPrincipalUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
            UpdatePrincipalUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
            DeactivatePrincipalUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
        ),
        principal_scope_resource=PrincipalScopeResource(
            UpdatePrincipalScopeUseCase(unit_of_work_factory=uow_factory, permission_guard=guard),
        ),
        scope_resource=ScopeResource(StoreScopeResolver(uow_factory)),
    )


def main() -> None:
    """CLI entry point - run the API under uvicorn."""
    settings = get_settings()
    app = create_campusrbac_app()
    logger.info("campusrbac v%s listening on %s:%d", __version__, settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()

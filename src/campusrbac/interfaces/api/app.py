"""Falcon ASGI application."""

import falcon.asgi
from falcon.asgi import App

from campusrbac.domain.exceptions import CampusRBACError
from campusrbac.interfaces.api.errors import handle_domain_error, handle_unexpected_error
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


def create_app(
    *,
    middleware: list,
    health_resource: HealthResource,
    catalog_resource: CatalogResource,
    role_configs_resource: RoleConfigsResource,
    role_config_resource: RoleConfigResource,
    role_config_permissions_resource: RoleConfigPermissionsResource,
    principals_resource: PrincipalsResource,
    principal_resource: PrincipalResource,
    principal_scope_resource: PrincipalScopeResource,
    scope_resource: ScopeResource,
) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware)
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(CampusRBACError, handle_domain_error)

    app.add_route("/v1/health", health_resource)
    app.add_route("/v1/catalog/roles", catalog_resource, suffix="roles")
    app.add_route("/v1/catalog/modules", catalog_resource, suffix="modules")
    app.add_route("/v1/role-configs", role_configs_resource)
    app.add_route("/v1/role-configs/{role_key}", role_config_resource)
    app.add_route("/v1/role-configs/{role_key}/permissions", role_config_permissions_resource)
    app.add_route("/v1/principals", principals_resource)
    app.add_route("/v1/principals/{principal_id:int}", principal_resource)
    app.add_route("/v1/principals/{principal_id:int}/scope", principal_scope_resource)
    app.add_route("/v1/me/scope", scope_resource)
    return app

"""Role and module catalog endpoints for client forms."""

import falcon.asgi

from campusrbac.application.use_cases.role_config.list_available_roles import ListAvailableRolesUseCase
from campusrbac.domain.registry import module_catalog
from campusrbac.interfaces.api.errors import unauthorized


class CatalogResource:
    """GET /v1/catalog/roles and /v1/catalog/modules."""

    def __init__(self, list_available_roles: ListAvailableRolesUseCase) -> None:
        self._list_roles = list_available_roles

    async def on_get_roles(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Roles the caller may create, with their scope requirements."""
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        resp.media = {"items": await self._list_roles.execute(identity)}
        resp.status = falcon.HTTP_200

    async def on_get_modules(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        resp.media = {"items": module_catalog()}
        resp.status = falcon.HTTP_200

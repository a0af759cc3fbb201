"""Caller scope endpoint."""

import falcon.asgi

from campusrbac.application.ports import ScopeResolver
from campusrbac.interfaces.api.errors import unauthorized


class ScopeResource:
    """GET /v1/me/scope - the caller's current data scope."""

    def __init__(self, scope_resolver: ScopeResolver) -> None:
        self._resolver = scope_resolver

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        scope = await self._resolver.resolve(identity)
        resp.media = scope.to_dict()
        resp.status = falcon.HTTP_200

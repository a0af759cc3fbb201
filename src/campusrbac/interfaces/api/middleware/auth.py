"""Auth middleware - resolves the bearer token to an Identity."""

import falcon.asgi


class AuthMiddleware:
    """Middleware that validates the bearer token and sets req.context.identity.

    A missing or invalid token leaves ``identity`` as None; resources answer 401.
    """

    def __init__(self, keycloak_provider=None) -> None:
        self._keycloak = keycloak_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        req.context.identity = None
        auth = req.get_header("Authorization")
        if not auth or not auth.startswith("Bearer ") or not self._keycloak:
            return
        req.context.identity = self._keycloak.decode_token(auth[7:])

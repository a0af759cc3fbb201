"""Maps domain errors to HTTP responses."""

import logging

import falcon
import falcon.asgi

from campusrbac.domain.exceptions import (
    AuthorizationDenied,
    CampusRBACError,
    ConflictError,
    IntegrityError,
    NotFound,
    PrincipalNotFound,
    ValidationError,
)

logger = logging.getLogger(__name__)


def _status_for(ex: CampusRBACError) -> str:
    if isinstance(ex, PrincipalNotFound):
        return falcon.HTTP_401
    if isinstance(ex, AuthorizationDenied):
        return falcon.HTTP_403
    if isinstance(ex, NotFound):
        return falcon.HTTP_404
    if isinstance(ex, ConflictError):
        return falcon.HTTP_409
    if isinstance(ex, ValidationError):
        return falcon.HTTP_400
    return falcon.HTTP_500


async def handle_domain_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: CampusRBACError, params
) -> None:
    """Error handler for every CampusRBACError raised by a use case."""
    resp.status = _status_for(ex)
    if isinstance(ex, IntegrityError):
        logger.error("Integrity violation on %s %s: %s", req.method, req.path, ex)
        resp.media = {"error": "Internal Server Error"}
        return
    if isinstance(ex, PrincipalNotFound):
        resp.media = {"error": "Unauthorized"}
        return
    body = {"error": str(ex)}
    if isinstance(ex, AuthorizationDenied):
        body["reason"] = ex.reason.value
    resp.media = body


async def handle_unexpected_error(req: falcon.asgi.Request, resp: falcon.asgi.Response, ex, params) -> None:
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def unauthorized(resp: falcon.asgi.Response) -> None:
    resp.status = falcon.HTTP_401
    resp.media = {"error": "Unauthorized"}


def bad_request(resp: falcon.asgi.Response, message: str) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": message}

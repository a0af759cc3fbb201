"""Principal administration API resources."""

from typing import Any

import falcon.asgi

from campusrbac.application.dto.principal_dto import (
    PrincipalCreateInput,
    PrincipalUpdateInput,
    ScopeAssignmentInput,
)
from campusrbac.application.use_cases.principal.create_principal import CreatePrincipalUseCase
from campusrbac.application.use_cases.principal.deactivate_principal import DeactivatePrincipalUseCase
from campusrbac.application.use_cases.principal.get_principal import GetPrincipalUseCase
from campusrbac.application.use_cases.principal.list_principals import ListPrincipalsUseCase
from campusrbac.application.use_cases.principal.update_principal import UpdatePrincipalUseCase
from campusrbac.application.use_cases.principal.update_principal_scope import UpdatePrincipalScopeUseCase
from campusrbac.interfaces.api.errors import bad_request, unauthorized


def _optional_int(value: Any) -> int | None:
    if value is None or value == "":
        return None
    return int(value)


def _int_list(value: Any) -> list[int]:
    if not value:
        return []
    if not isinstance(value, list):
        raise ValueError("expected a list of ids")
    return [int(v) for v in value]


def scope_from_body(body: dict[str, Any]) -> ScopeAssignmentInput:
    """Scope fields from a request body. Raises ValueError on malformed ids."""
    return ScopeAssignmentInput(
        college_id=_optional_int(body.get("college_id")),
        course_id=_optional_int(body.get("course_id")),
        branch_id=_optional_int(body.get("branch_id")),
        college_ids=_int_list(body.get("college_ids")),
        course_ids=_int_list(body.get("course_ids")),
        branch_ids=_int_list(body.get("branch_ids")),
        all_courses=body.get("all_courses") is True,
        all_branches=body.get("all_branches") is True,
    )


class PrincipalsResource:
    """GET/POST /v1/principals - list visible principals and provision new ones."""

    def __init__(
        self,
        list_principals: ListPrincipalsUseCase,
        create_principal: CreatePrincipalUseCase,
    ) -> None:
        self._list = list_principals
        self._create = create_principal

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List principals within the caller's scope."""
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        include_inactive = req.get_param_as_bool("include_inactive") or False
        principals = await self._list.execute(identity, include_inactive=include_inactive)
        resp.media = {"items": [p.to_public_dict() for p in principals]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        try:
            body = await req.get_media() or {}
            data = PrincipalCreateInput(
                name=(body.get("name") or "").strip(),
                email=(body.get("email") or "").strip(),
                username=(body.get("username") or "").strip(),
                role=body.get("role") or "",
                scope=scope_from_body(body),
                permissions=body.get("permissions"),
            )
        except (AttributeError, TypeError, ValueError) as e:
            bad_request(resp, str(e))
            return

        principal = await self._create.execute(identity, data)
        resp.media = principal.to_public_dict()
        resp.status = falcon.HTTP_201


def update_from_body(body: dict[str, Any]) -> PrincipalUpdateInput:
    """Partial update from a request body. Raises ValueError on malformed fields."""
    name = body.get("name")
    role = body.get("role")
    is_active = body.get("is_active")
    if name is not None and not isinstance(name, str):
        raise ValueError("name must be a string")
    if role is not None and not isinstance(role, str):
        raise ValueError("role must be a string")
    if is_active is not None and not isinstance(is_active, bool):
        raise ValueError("is_active must be a boolean")
    return PrincipalUpdateInput(
        name=name,
        role=role or None,
        permissions=body.get("permissions"),
        is_active=is_active,
    )


class PrincipalResource:
    """GET/PATCH/DELETE /v1/principals/{principal_id}."""

    def __init__(
        self,
        get_principal: GetPrincipalUseCase,
        update_principal: UpdatePrincipalUseCase,
        deactivate_principal: DeactivatePrincipalUseCase,
    ) -> None:
        self._get = get_principal
        self._update = update_principal
        self._deactivate = deactivate_principal

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_id: int
    ) -> None:
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        principal = await self._get.execute(identity, principal_id)
        resp.media = principal.to_public_dict()
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_id: int
    ) -> None:
        """Change name, role, permission override or active flag."""
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        try:
            body = await req.get_media() or {}
            data = update_from_body(body)
        except (AttributeError, TypeError, ValueError) as e:
            bad_request(resp, str(e))
            return

        principal = await self._update.execute(identity, principal_id, data)
        resp.media = principal.to_public_dict()
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_id: int
    ) -> None:
        """Deactivate."""
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        await self._deactivate.execute(identity, principal_id)
        resp.status = falcon.HTTP_204


class PrincipalScopeResource:
    """PUT /v1/principals/{principal_id}/scope - replace scope assignment."""

    def __init__(self, update_principal_scope: UpdatePrincipalScopeUseCase) -> None:
        self._update = update_principal_scope

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, principal_id: int
    ) -> None:
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        try:
            body = await req.get_media() or {}
            scope = scope_from_body(body)
        except (AttributeError, TypeError, ValueError) as e:
            bad_request(resp, str(e))
            return

        principal = await self._update.execute(identity, principal_id, scope)
        resp.media = principal.to_public_dict()
        resp.status = falcon.HTTP_200

"""Role configuration API resources."""

import falcon.asgi

from campusrbac.application.dto.role_config_dto import RoleConfigUpdate
from campusrbac.application.use_cases.role_config.create_custom_role import CreateCustomRoleUseCase
from campusrbac.application.use_cases.role_config.delete_custom_role import DeleteCustomRoleUseCase
from campusrbac.application.use_cases.role_config.get_role_config import (
    GetEffectivePermissionsUseCase,
    GetRoleConfigUseCase,
    ListRoleConfigsUseCase,
)
from campusrbac.application.use_cases.role_config.update_role_config import UpdateRoleConfigUseCase
from campusrbac.domain.entities import RoleConfig
from campusrbac.interfaces.api.errors import bad_request, unauthorized


def _config_to_dict(config: RoleConfig) -> dict:
    return {
        "role_key": config.role_key,
        "label": config.label,
        "description": config.description,
        "permissions": config.permissions,
        "is_custom": config.is_custom,
        "updated_at": config.updated_at.isoformat() if config.updated_at else None,
    }


class RoleConfigsResource:
    """GET/POST /v1/role-configs - list roles and create custom roles."""

    def __init__(
        self,
        list_role_configs: ListRoleConfigsUseCase,
        create_custom_role: CreateCustomRoleUseCase,
    ) -> None:
        self._list = list_role_configs
        self._create = create_custom_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        configs = await self._list.execute(identity)
        resp.media = {"items": [_config_to_dict(c) for c in configs]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create custom role from role_key, label, description, permissions."""
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        body = await req.get_media() or {}
        if not isinstance(body, dict):
            bad_request(resp, "Expected a JSON object")
            return

        config = await self._create.execute(
            identity,
            body.get("role_key"),
            label=body.get("label"),
            description=body.get("description"),
            permissions=body.get("permissions"),
        )
        resp.media = _config_to_dict(config)
        resp.status = falcon.HTTP_201


class RoleConfigResource:
    """GET/PUT/DELETE /v1/role-configs/{role_key}."""

    def __init__(
        self,
        get_role_config: GetRoleConfigUseCase,
        update_role_config: UpdateRoleConfigUseCase,
        delete_custom_role: DeleteCustomRoleUseCase,
    ) -> None:
        self._get = get_role_config
        self._update = update_role_config
        self._delete = delete_custom_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_key: str) -> None:
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        config = await self._get.execute(identity, role_key)
        resp.media = _config_to_dict(config)
        resp.status = falcon.HTTP_200

    async def on_put(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_key: str) -> None:
        """Update label/description/permissions; propagate to holders unless told not to."""
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        body = await req.get_media() or {}
        if not isinstance(body, dict):
            bad_request(resp, "Expected a JSON object")
            return

        result = await self._update.execute(
            identity,
            role_key,
            RoleConfigUpdate(
                label=body.get("label"),
                description=body.get("description"),
                permissions=body.get("permissions"),
            ),
            propagate=body.get("propagate_to_existing_users", True) is not False,
        )
        resp.media = {
            "config": _config_to_dict(result.config),
            "updated_user_count": result.updated_user_count,
        }
        resp.status = falcon.HTTP_200

    async def on_delete(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_key: str) -> None:
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        await self._delete.execute(identity, role_key)
        resp.status = falcon.HTTP_204


class RoleConfigPermissionsResource:
    """GET /v1/role-configs/{role_key}/permissions - set a new holder receives."""

    def __init__(self, get_effective_permissions: GetEffectivePermissionsUseCase) -> None:
        self._get = get_effective_permissions

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_key: str) -> None:
        identity = getattr(req.context, "identity", None)
        if not identity:
            unauthorized(resp)
            return

        permissions = await self._get.execute(identity, role_key)
        resp.media = {"role_key": role_key, "permissions": permissions}
        resp.status = falcon.HTTP_200

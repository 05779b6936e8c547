"""Per-user override API resources."""

import falcon.asgi

from accessgate.application.dto.catalog_dto import ResourcePermissionInput
from accessgate.application.use_cases.user_permission.assign_role import AssignRoleUseCase
from accessgate.application.use_cases.user_permission.change_override import (
    ChangeOverrideUseCase,
    OverrideChange,
)
from accessgate.application.use_cases.user_permission.resource_permissions import (
    AddResourcePermissionUseCase,
    RemoveResourcePermissionUseCase,
)
from accessgate.domain.entities import UserPermission
from accessgate.domain.exceptions import NotFound, PermissionDenied, ValidationError
from accessgate.domain.value_objects import PermissionAction, SystemModule
from accessgate.interfaces.api.resources.serializers import user_permission_to_dict

# (list kind, HTTP verb) -> change
_OVERRIDE_CHANGES = {
    ("custom", "PUT"): OverrideChange.GRANT,
    ("custom", "DELETE"): OverrideChange.REVOKE_GRANT,
    ("restricted", "PUT"): OverrideChange.RESTRICT,
    ("restricted", "DELETE"): OverrideChange.UNRESTRICT,
}


class UserPermissionsResource:
    """GET /v1/users/{user_id}/permissions - a user's override record."""

    def __init__(self, unit_of_work_factory: type, permission_checker) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Users may read their own record; reading others needs users:read."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        if user.user_id != user_id:
            has_read = await self._permission_checker.check(
                user.user_id, SystemModule.USERS, PermissionAction.READ
            )
            if not has_read:
                resp.status = falcon.HTTP_403
                resp.media = {"error": "Permission denied"}
                return

        async with self._uow_factory(read_only=True) as uow:
            record = await uow.user_permissions.get(user_id)

        resp.media = user_permission_to_dict(record or UserPermission(user_id=user_id))
        resp.status = falcon.HTTP_200


class UserRoleResource:
    """PUT /v1/users/{user_id}/permissions/role - set the role on the override record."""

    def __init__(self, assign_role: AssignRoleUseCase) -> None:
        self._assign_role = assign_role

    async def on_put(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            role_id = body["role_id"]
            if not isinstance(role_id, str) or not role_id:
                raise ValueError("role_id must be a non-empty string")
        except (KeyError, TypeError, ValueError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            record = await self._assign_role.execute(user.user_id, user_id, role_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Not found"}
            return

        resp.media = user_permission_to_dict(record)
        resp.status = falcon.HTTP_200


class UserOverrideResource:
    """PUT/DELETE /v1/users/{user_id}/permissions/{kind}/{permission_id}.

    ``kind`` is ``custom`` (grants) or ``restricted`` (restrictions).
    """

    def __init__(self, change_override: ChangeOverrideUseCase) -> None:
        self._change_override = change_override

    async def _apply(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        user_id: str,
        kind: str,
        permission_id: str,
    ) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        change = _OVERRIDE_CHANGES.get((kind, req.method))
        if change is None:
            resp.status = falcon.HTTP_404
            resp.media = {"error": f"Unknown override list: {kind}"}
            return

        try:
            record = await self._change_override.execute(
                user.user_id, user_id, permission_id, change
            )
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Not found"}
            return

        resp.media = user_permission_to_dict(record)
        resp.status = falcon.HTTP_200

    async def on_put(self, req, resp, user_id: str, kind: str, permission_id: str) -> None:
        """Add permission_id to the custom or restricted list."""
        await self._apply(req, resp, user_id, kind, permission_id)

    async def on_delete(self, req, resp, user_id: str, kind: str, permission_id: str) -> None:
        """Remove permission_id from the custom or restricted list."""
        await self._apply(req, resp, user_id, kind, permission_id)


class UserResourcePermissionsResource:
    """POST/DELETE /v1/users/{user_id}/permissions/resources - resource-scoped grants."""

    def __init__(
        self,
        add_resource_permission: AddResourcePermissionUseCase,
        remove_resource_permission: RemoveResourcePermissionUseCase,
    ) -> None:
        self._add = add_resource_permission
        self._remove = remove_resource_permission

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Add or replace an entry. Omit resource_id for every resource of the type."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            data = ResourcePermissionInput(
                resource_type=body["resource_type"],
                permission_id=body["permission_id"],
                actions=list(body["actions"]),
                resource_id=body.get("resource_id"),
            )
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            record = await self._add.execute(user.user_id, user_id, data)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Not found"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = user_permission_to_dict(record)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, user_id: str
    ) -> None:
        """Remove the entry named by resource_type, resource_id and permission_id."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        resource_type = req.get_param("resource_type")
        permission_id = req.get_param("permission_id")
        if not resource_type or not permission_id:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "resource_type and permission_id are required"}
            return

        try:
            record = await self._remove.execute(
                user.user_id,
                user_id,
                resource_type,
                req.get_param("resource_id"),
                permission_id,
            )
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Not found"}
            return

        resp.media = user_permission_to_dict(record)
        resp.status = falcon.HTTP_200

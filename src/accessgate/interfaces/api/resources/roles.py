"""Role API resources."""

import falcon.asgi

from accessgate.application.dto.catalog_dto import RoleCreateInput, RoleUpdateInput
from accessgate.application.use_cases.role.create_role import CreateRoleUseCase
from accessgate.application.use_cases.role.delete_role import DeleteRoleUseCase
from accessgate.application.use_cases.role.update_role import UpdateRoleUseCase
from accessgate.domain.exceptions import NotFound, PermissionDenied, ValidationError
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule
from accessgate.interfaces.api.resources.serializers import role_to_dict

ROLE_RESOURCE = ResourceQualifier("role")


def _int_or_none(value):
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError("level must be an integer")
    return value


class RolesResource:
    """GET/POST /v1/roles - list roles by level and create roles."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker,
        create_role: CreateRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._create_role = create_role

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List roles, highest level first."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        has_read = await self._permission_checker.check(
            user.user_id, SystemModule.ADMIN, PermissionAction.READ, ROLE_RESOURCE
        )
        if not has_read:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        async with self._uow_factory(read_only=True) as uow:
            roles = await uow.roles.list_all()

        resp.media = {"items": [role_to_dict(r) for r in roles]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create a role."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            data = RoleCreateInput(
                name=body["name"],
                description=body.get("description") or "",
                permissions=list(body.get("permissions") or []),
                level=_int_or_none(body.get("level")) or 0,
                id=body.get("id"),
            )
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            role = await self._create_role.execute(user.user_id, data)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_201


class RoleResource:
    """GET/PATCH/DELETE /v1/roles/{role_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker,
        update_role: UpdateRoleUseCase,
        delete_role: DeleteRoleUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._update_role = update_role
        self._delete_role = delete_role

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Get one role."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        has_read = await self._permission_checker.check(
            user.user_id, SystemModule.ADMIN, PermissionAction.READ, ROLE_RESOURCE
        )
        if not has_read:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        async with self._uow_factory(read_only=True) as uow:
            role = await uow.roles.get_by_id(role_id)
        if not role:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Role not found"}
            return

        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Update fields of a role. ``permissions`` replaces the whole set."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            permissions = body.get("permissions")
            data = RoleUpdateInput(
                name=body.get("name"),
                description=body.get("description"),
                permissions=list(permissions) if permissions is not None else None,
                level=_int_or_none(body.get("level")),
            )
        except (TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            role = await self._update_role.execute(user.user_id, role_id, data)
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

        resp.media = role_to_dict(role)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, role_id: str
    ) -> None:
        """Delete a role."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            await self._delete_role.execute(user.user_id, role_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Not found"}
            return

        resp.status = falcon.HTTP_204

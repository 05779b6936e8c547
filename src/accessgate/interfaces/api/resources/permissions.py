"""Permission catalog API resources."""

import falcon.asgi

from accessgate.application.dto.catalog_dto import PermissionCreateInput, PermissionUpdateInput
from accessgate.application.use_cases.permission.create_permission import CreatePermissionUseCase
from accessgate.application.use_cases.permission.delete_permission import DeletePermissionUseCase
from accessgate.application.use_cases.permission.update_permission import UpdatePermissionUseCase
from accessgate.domain.exceptions import NotFound, PermissionDenied, ValidationError
from accessgate.domain.validation import parse_module
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule
from accessgate.interfaces.api.resources.serializers import permission_to_dict

CATALOG_RESOURCE = ResourceQualifier("permission")


class PermissionsResource:
    """GET/POST /v1/permissions - list and create catalog permissions."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker,
        create_permission: CreatePermissionUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._create_permission = create_permission

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List the catalog, optionally filtered by ?module=."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        has_read = await self._permission_checker.check(
            user.user_id, SystemModule.ADMIN, PermissionAction.READ, CATALOG_RESOURCE
        )
        if not has_read:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        module = req.get_param("module")
        try:
            module = parse_module(module) if module else None
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        async with self._uow_factory(read_only=True) as uow:
            if module:
                permissions = await uow.permissions.list_by_module(module)
            else:
                permissions = await uow.permissions.list_all()

        resp.media = {"items": [permission_to_dict(p) for p in permissions]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create a catalog permission."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            data = PermissionCreateInput(
                name=body["name"],
                module=body["module"],
                actions=list(body["actions"]),
                description=body.get("description") or "",
                resource=body.get("resource"),
                conditions=body.get("conditions"),
                id=body.get("id"),
            )
        except (KeyError, TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            permission = await self._create_permission.execute(user.user_id, data)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_201


class PermissionResource:
    """GET/PATCH/DELETE /v1/permissions/{permission_id}."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker,
        update_permission: UpdatePermissionUseCase,
        delete_permission: DeletePermissionUseCase,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._update_permission = update_permission
        self._delete_permission = delete_permission

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        permission_id: str,
    ) -> None:
        """Get one catalog permission."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        has_read = await self._permission_checker.check(
            user.user_id, SystemModule.ADMIN, PermissionAction.READ, CATALOG_RESOURCE
        )
        if not has_read:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        async with self._uow_factory(read_only=True) as uow:
            permission = await uow.permissions.get_by_id(permission_id)
        if not permission:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Permission not found"}
            return

        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        permission_id: str,
    ) -> None:
        """Update fields of a catalog permission. ``"resource": null`` clears the scope."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            body = await req.get_media()
            actions = body.get("actions")
            data = PermissionUpdateInput(
                name=body.get("name"),
                module=body.get("module"),
                actions=list(actions) if actions is not None else None,
                description=body.get("description"),
                resource=body.get("resource"),
                clear_resource="resource" in body and body["resource"] is None,
                conditions=body.get("conditions"),
            )
        except (TypeError, AttributeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Invalid request body: {e}"}
            return

        try:
            permission = await self._update_permission.execute(
                user.user_id, permission_id, data
            )
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

        resp.media = permission_to_dict(permission)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        permission_id: str,
    ) -> None:
        """Delete a catalog permission. References to it stop matching."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            await self._delete_permission.execute(user.user_id, permission_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return
        except NotFound:
            resp.status = falcon.HTTP_404
            resp.media = {"error": "Not found"}
            return

        resp.status = falcon.HTTP_204

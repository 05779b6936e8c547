"""Authorization API resources."""

import falcon.asgi

from accessgate.application.ports import PermissionChecker
from accessgate.domain.exceptions import ValidationError
from accessgate.domain.value_objects import PermissionAction, SystemModule
from accessgate.interfaces.api.resources.serializers import parse_permission_request

MAX_BATCH = 100


async def _target_actor(
    req: falcon.asgi.Request, body: dict, checker: PermissionChecker
) -> str | None:
    """Actor to evaluate: the caller, or another user if the caller may read users."""
    caller = req.context.user.user_id
    target = body.get("actor_id") or caller
    if target != caller and not await checker.check(
        caller, SystemModule.USERS, PermissionAction.READ
    ):
        return None
    return target


class AuthorizeResource:
    """POST /v1/authorize - decide one request."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Return {granted, reason} for the caller or a given actor_id."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        body = await req.get_media()
        try:
            request = parse_permission_request(body)
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        actor_id = await _target_actor(req, body, self._permission_checker)
        if actor_id is None:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        result = await self._permission_checker.authorize(actor_id, request)
        resp.media = result.to_dict()
        resp.status = falcon.HTTP_200


class AuthorizeBatchResource:
    """POST /v1/authorize/batch - decide several requests independently."""

    def __init__(self, permission_checker: PermissionChecker) -> None:
        self._permission_checker = permission_checker

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Return {results: [{granted, reason}, ...]} in request order."""
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        body = await req.get_media()
        items = body.get("requests") if isinstance(body, dict) else None
        if not isinstance(items, list) or not items:
            resp.status = falcon.HTTP_400
            resp.media = {"error": "requests must be a non-empty list"}
            return
        if len(items) > MAX_BATCH:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"At most {MAX_BATCH} requests per batch"}
            return
        try:
            requests = [parse_permission_request(item) for item in items]
        except ValidationError as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": str(e)}
            return

        actor_id = await _target_actor(req, body, self._permission_checker)
        if actor_id is None:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        results = await self._permission_checker.authorize_many(actor_id, requests)
        resp.media = {"results": [r.to_dict() for r in results]}
        resp.status = falcon.HTTP_200

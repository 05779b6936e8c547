"""Catalog seeding API resource."""

import falcon.asgi

from accessgate.application.use_cases.catalog.initialize_default_catalog import (
    InitializeDefaultCatalogUseCase,
)
from accessgate.domain.exceptions import PermissionDenied


class CatalogInitializeResource:
    """POST /v1/catalog/initialize - seed default permissions and roles."""

    def __init__(self, initialize_catalog: InitializeDefaultCatalogUseCase) -> None:
        self._initialize_catalog = initialize_catalog

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = getattr(req.context, "user", None)
        if not user:
            resp.status = falcon.HTTP_401
            resp.media = {"error": "Unauthorized"}
            return

        try:
            result = await self._initialize_catalog.execute(user.user_id)
        except PermissionDenied:
            resp.status = falcon.HTTP_403
            resp.media = {"error": "Permission denied"}
            return

        resp.media = {
            "permissions_created": result.permissions_created,
            "roles_created": result.roles_created,
        }
        resp.status = falcon.HTTP_200

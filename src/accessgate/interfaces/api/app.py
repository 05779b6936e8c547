"""Falcon ASGI application."""

import logging
from dataclasses import dataclass

import falcon
import falcon.asgi
from falcon.asgi import App

from accessgate.interfaces.api.resources.authorize import AuthorizeBatchResource, AuthorizeResource
from accessgate.interfaces.api.resources.catalog import CatalogInitializeResource
from accessgate.interfaces.api.resources.health import HealthResource
from accessgate.interfaces.api.resources.permissions import PermissionResource, PermissionsResource
from accessgate.interfaces.api.resources.roles import RoleResource, RolesResource
from accessgate.interfaces.api.resources.user_permissions import (
    UserOverrideResource,
    UserPermissionsResource,
    UserResourcePermissionsResource,
    UserRoleResource,
)

logger = logging.getLogger(__name__)


@dataclass
class ApiResources:
    """All route handlers of the API."""

    health: HealthResource
    authorize: AuthorizeResource
    authorize_batch: AuthorizeBatchResource
    permissions: PermissionsResource
    permission: PermissionResource
    roles: RolesResource
    role: RoleResource
    user_permissions: UserPermissionsResource
    user_role: UserRoleResource
    user_override: UserOverrideResource
    user_resource_permissions: UserResourcePermissionsResource
    catalog_initialize: CatalogInitializeResource


async def handle_unexpected(req, resp, ex, params) -> None:
    """Log unhandled errors and answer 500 without leaking details."""
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def create_app(resources: ApiResources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes."""
    app = falcon.asgi.App(middleware=middleware or [])
    app.add_error_handler(Exception, handle_unexpected)

    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/authorize", resources.authorize)
    app.add_route("/v1/authorize/batch", resources.authorize_batch)
    app.add_route("/v1/permissions", resources.permissions)
    app.add_route("/v1/permissions/{permission_id}", resources.permission)
    app.add_route("/v1/roles", resources.roles)
    app.add_route("/v1/roles/{role_id}", resources.role)
    app.add_route("/v1/users/{user_id}/permissions", resources.user_permissions)
    app.add_route("/v1/users/{user_id}/permissions/role", resources.user_role)
    app.add_route(
        "/v1/users/{user_id}/permissions/resources", resources.user_resource_permissions
    )
    app.add_route(
        "/v1/users/{user_id}/permissions/{kind}/{permission_id}", resources.user_override
    )
    app.add_route("/v1/catalog/initialize", resources.catalog_initialize)
    return app

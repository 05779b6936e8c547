"""Application entry point and composition root."""

import argparse
import logging

from accessgate import __version__
from accessgate.application.use_cases.catalog.initialize_default_catalog import (
    InitializeDefaultCatalogUseCase,
)
from accessgate.application.use_cases.permission.create_permission import CreatePermissionUseCase
from accessgate.application.use_cases.permission.delete_permission import DeletePermissionUseCase
from accessgate.application.use_cases.permission.update_permission import UpdatePermissionUseCase
from accessgate.application.use_cases.role.create_role import CreateRoleUseCase
from accessgate.application.use_cases.role.delete_role import DeleteRoleUseCase
from accessgate.application.use_cases.role.update_role import UpdateRoleUseCase
from accessgate.application.use_cases.user_permission.assign_role import AssignRoleUseCase
from accessgate.application.use_cases.user_permission.change_override import (
    ChangeOverrideUseCase,
)
from accessgate.application.use_cases.user_permission.resource_permissions import (
    AddResourcePermissionUseCase,
    RemoveResourcePermissionUseCase,
)
from accessgate.config import Settings, get_settings
from accessgate.domain.policy import PolicyEvaluator
from accessgate.infrastructure.auth.keycloak_provider import KeycloakProvider
from accessgate.infrastructure.permission.permission_checker import AccessGatePermissionChecker
from accessgate.infrastructure.persistence.memory import (
    InMemoryPolicyStore,
    create_memory_uow_factory,
)
from accessgate.infrastructure.persistence.postgres.connection import create_pool
from accessgate.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from accessgate.interfaces.api.app import ApiResources, create_app
from accessgate.interfaces.api.middleware.auth import AuthMiddleware
from accessgate.interfaces.api.middleware.cors import CORSMiddleware
from accessgate.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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
from accessgate.logging_config import configure_logging

logger = logging.getLogger(__name__)


def create_accessgate_app(
    settings: Settings | None = None,
    store: InMemoryPolicyStore | None = None,
):
    """Composition root - build Falcon app with all dependencies.

    ``store`` is only used with the memory backend; a fresh empty store is
    created when it is omitted.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.debug)

    middleware = []
    cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    middleware.append(CORSMiddleware(cors_origins))

    if settings.store_backend == "memory":
        uow_factory = create_memory_uow_factory(store or InMemoryPolicyStore())
    else:
        pool = create_pool(settings.database_url)
        uow_factory = create_uow_factory(pool)
        middleware.append(PoolLifespanMiddleware(pool))

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    middleware.append(AuthMiddleware(keycloak))

    permission_checker = AccessGatePermissionChecker(
        uow_factory,
        evaluator=PolicyEvaluator(settings.superuser_role),
        timeout_seconds=settings.store_timeout_seconds,
    )
    deps = {"unit_of_work_factory": uow_factory, "permission_checker": permission_checker}

    resources = ApiResources(
        health=HealthResource(uow_factory),
        authorize=AuthorizeResource(permission_checker),
        authorize_batch=AuthorizeBatchResource(permission_checker),
        permissions=PermissionsResource(
            uow_factory, permission_checker, CreatePermissionUseCase(**deps)
        ),
        permission=PermissionResource(
            uow_factory,
            permission_checker,
            UpdatePermissionUseCase(**deps),
            DeletePermissionUseCase(**deps),
        ),
        roles=RolesResource(uow_factory, permission_checker, CreateRoleUseCase(**deps)),
        role=RoleResource(
            uow_factory,
            permission_checker,
            UpdateRoleUseCase(**deps),
            DeleteRoleUseCase(**deps),
        ),
        user_permissions=UserPermissionsResource(uow_factory, permission_checker),
        user_role=UserRoleResource(AssignRoleUseCase(**deps)),
        user_override=UserOverrideResource(ChangeOverrideUseCase(**deps)),
        user_resource_permissions=UserResourcePermissionsResource(
            AddResourcePermissionUseCase(**deps),
            RemoveResourcePermissionUseCase(**deps),
        ),
        catalog_initialize=CatalogInitializeResource(
            InitializeDefaultCatalogUseCase(**deps, superuser_role=settings.superuser_role)
        ),
    )

    logger.info(
        "AccessGate v%s (%s store, %s auth)",
        __version__,
        settings.store_backend,
        "keycloak" if keycloak else "header",
    )
    return create_app(resources, middleware)


def run_server(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_accessgate_app()
    uvicorn.run(app, host=host, port=port, log_config=None)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(prog="accessgate", description="AccessGate API server")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--version", action="version", version=f"AccessGate v{__version__}")
    args = parser.parse_args()
    run_server(args.host, args.port)


if __name__ == "__main__":
    main()

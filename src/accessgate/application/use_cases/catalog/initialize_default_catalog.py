"""Initialize default catalog use case."""

import logging
from datetime import UTC, datetime

from accessgate.application.dto.catalog_dto import CatalogSeedResult
from accessgate.application.ports import PermissionChecker
from accessgate.application.use_cases.catalog.defaults import (
    build_default_permissions,
    default_role_specs,
)
from accessgate.domain.entities import Role
from accessgate.domain.exceptions import PermissionDenied
from accessgate.domain.policy import DEFAULT_SUPERUSER_ROLE
from accessgate.domain.value_objects import PermissionAction, SystemModule

logger = logging.getLogger(__name__)


class InitializeDefaultCatalogUseCase:
    """Seed default permissions and roles into empty tables.

    Each table is seeded only when it is empty, so running this twice is a
    no-op. While the catalog is still empty any actor may run it.
    """

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
        superuser_role: str = DEFAULT_SUPERUSER_ROLE,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker
        self._superuser_role = superuser_role

    async def execute(self, actor_id: str) -> CatalogSeedResult:
        """Seed what is missing and report how many records were created."""
        async with self._uow_factory(read_only=True) as uow:
            bootstrapping = not await uow.permissions.list_all()
        if not bootstrapping:
            allowed = await self._permission_checker.check(
                actor_id, SystemModule.ADMIN, PermissionAction.MANAGE
            )
            if not allowed:
                raise PermissionDenied("User may not initialize the catalog")

        permissions_created = roles_created = 0
        async with self._uow_factory() as uow:
            permissions = await uow.permissions.list_all()
            if not permissions:
                permissions = build_default_permissions()
                for permission in permissions:
                    await uow.permissions.create(permission)
                permissions_created = len(permissions)
            else:
                logger.info("Permissions already initialized")

            if not await uow.roles.list_all():
                now = datetime.now(UTC)
                for role_id, name, description, level, ids in default_role_specs(
                    permissions, self._superuser_role
                ):
                    await uow.roles.create(
                        Role(
                            id=role_id,
                            name=name,
                            description=description,
                            permissions=ids,
                            level=level,
                            created_at=now,
                            updated_at=now,
                        )
                    )
                    roles_created += 1
            else:
                logger.info("Roles already initialized")

        logger.info(
            "Default catalog initialized by %s: %d permissions, %d roles",
            actor_id,
            permissions_created,
            roles_created,
        )
        return CatalogSeedResult(
            permissions_created=permissions_created, roles_created=roles_created
        )

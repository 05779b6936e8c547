"""Delete permission use case."""

import logging

from accessgate.application.ports import PermissionChecker
from accessgate.domain.exceptions import NotFound, PermissionDenied
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule

logger = logging.getLogger(__name__)


class DeletePermissionUseCase:
    """Remove a permission from the catalog without touching roles or overrides."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, permission_id: str) -> None:
        """Delete permission. Roles still listing it keep a dangling id."""
        allowed = await self._permission_checker.check(
            actor_id,
            SystemModule.ADMIN,
            PermissionAction.DELETE,
            ResourceQualifier("permission"),
        )
        if not allowed:
            raise PermissionDenied("User may not delete permissions")

        async with self._uow_factory() as uow:
            if not await uow.permissions.get_by_id(permission_id):
                raise NotFound("Permission", permission_id)
            referencing = [
                r.name for r in await uow.roles.list_all() if permission_id in r.permissions
            ]
            await uow.permissions.delete(permission_id)

        if referencing:
            logger.warning(
                "Permission %s deleted by %s while still referenced by roles: %s",
                permission_id,
                actor_id,
                ", ".join(referencing),
            )
        else:
            logger.info("Permission %s deleted by %s", permission_id, actor_id)

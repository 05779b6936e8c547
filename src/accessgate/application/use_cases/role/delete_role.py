"""Delete role use case."""

import logging

from accessgate.application.ports import PermissionChecker
from accessgate.domain.exceptions import NotFound, PermissionDenied
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule

logger = logging.getLogger(__name__)


class DeleteRoleUseCase:
    """Remove a role. Override records and actors naming it are not touched."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, role_id: str) -> None:
        """Delete role by id."""
        allowed = await self._permission_checker.check(
            actor_id,
            SystemModule.ADMIN,
            PermissionAction.DELETE,
            ResourceQualifier("role"),
        )
        if not allowed:
            raise PermissionDenied("User may not delete roles")

        async with self._uow_factory() as uow:
            role = await uow.roles.get_by_id(role_id)
            if not role:
                raise NotFound("Role", role_id)
            await uow.roles.delete(role_id)

        logger.info("Role %s (%s) deleted by %s", role_id, role.name, actor_id)

"""Assign role use case."""

import logging
from datetime import UTC, datetime

from accessgate.application.ports import PermissionChecker
from accessgate.domain.entities import UserPermission
from accessgate.domain.exceptions import NotFound, PermissionDenied
from accessgate.domain.value_objects import PermissionAction, SystemModule

logger = logging.getLogger(__name__)


class AssignRoleUseCase:
    """Point a user's override record at a role, creating the record if needed."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, user_id: str, role_id: str) -> UserPermission:
        """Assign role_id to user_id. Actor must be allowed to assign user permissions."""
        allowed = await self._permission_checker.check(
            actor_id, SystemModule.USERS, PermissionAction.ASSIGN
        )
        if not allowed:
            raise PermissionDenied("User may not assign permissions")

        async with self._uow_factory() as uow:
            if not await uow.roles.get_by_id(role_id):
                raise NotFound("Role", role_id)
            record = await uow.user_permissions.get(user_id) or UserPermission(user_id=user_id)
            record.assign_role(role_id)
            record.updated_at = datetime.now(UTC)
            record.updated_by = actor_id
            await uow.user_permissions.save(record)

        logger.info("Role %s assigned to %s by %s", role_id, user_id, actor_id)
        return record

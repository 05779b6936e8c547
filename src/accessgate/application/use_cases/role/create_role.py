"""Create role use case."""

import logging
from datetime import UTC, datetime
from uuid import uuid4

from accessgate.application.dto.catalog_dto import RoleCreateInput
from accessgate.application.ports import PermissionChecker
from accessgate.domain.entities import Role
from accessgate.domain.exceptions import PermissionDenied, ValidationError
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule

logger = logging.getLogger(__name__)


class CreateRoleUseCase:
    """Register a new role with a unique name."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, data: RoleCreateInput) -> Role:
        """Create role. Unknown permission ids are accepted and logged."""
        allowed = await self._permission_checker.check(
            actor_id,
            SystemModule.ADMIN,
            PermissionAction.CREATE,
            ResourceQualifier("role"),
        )
        if not allowed:
            raise PermissionDenied("User may not create roles")

        now = datetime.now(UTC)
        role = Role(
            id=data.id or str(uuid4()),
            name=data.name,
            description=data.description,
            permissions=data.permissions,
            level=data.level,
            created_at=now,
            updated_at=now,
        )
        async with self._uow_factory() as uow:
            if await uow.roles.get_by_name(role.name):
                raise ValidationError(f"Role name already in use: {role.name}")
            if await uow.roles.get_by_id(role.id):
                raise ValidationError(f"Role {role.id} already exists")
            known = await uow.permissions.list_by_ids(role.permissions)
            missing = role.permissions - {p.id for p in known}
            await uow.roles.create(role)

        if missing:
            logger.warning("Role %s created with unknown permissions: %s", role.name, sorted(missing))
        logger.info("Role %s (%s) created by %s", role.id, role.name, actor_id)
        return role

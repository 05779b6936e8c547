"""Update role use case."""

import logging
from dataclasses import replace
from datetime import UTC, datetime

from accessgate.application.dto.catalog_dto import RoleUpdateInput
from accessgate.application.ports import PermissionChecker
from accessgate.domain.entities import Role
from accessgate.domain.exceptions import NotFound, PermissionDenied, ValidationError
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule

logger = logging.getLogger(__name__)


class UpdateRoleUseCase:
    """Edit a role's name, description, permission set or level."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, role_id: str, data: RoleUpdateInput) -> Role:
        """Apply the non-None fields of data to the role."""
        allowed = await self._permission_checker.check(
            actor_id,
            SystemModule.ADMIN,
            PermissionAction.UPDATE,
            ResourceQualifier("role"),
        )
        if not allowed:
            raise PermissionDenied("User may not update roles")

        async with self._uow_factory() as uow:
            existing = await uow.roles.get_by_id(role_id)
            if not existing:
                raise NotFound("Role", role_id)
            changes = {
                k: v
                for k, v in {
                    "name": data.name,
                    "description": data.description,
                    "permissions": data.permissions,
                    "level": data.level,
                }.items()
                if v is not None
            }
            updated = replace(existing, **changes, updated_at=datetime.now(UTC))
            if updated.name != existing.name:
                clash = await uow.roles.get_by_name(updated.name)
                if clash and clash.id != role_id:
                    raise ValidationError(f"Role name already in use: {updated.name}")
            await uow.roles.update(updated)

        logger.info("Role %s updated by %s", role_id, actor_id)
        return updated

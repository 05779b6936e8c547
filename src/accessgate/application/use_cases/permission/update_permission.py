"""Update permission use case."""

import logging
from dataclasses import replace

from accessgate.application.dto.catalog_dto import PermissionUpdateInput
from accessgate.application.ports import PermissionChecker
from accessgate.domain.entities import Permission
from accessgate.domain.exceptions import NotFound, PermissionDenied
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule

logger = logging.getLogger(__name__)


class UpdatePermissionUseCase:
    """Edit a catalog permission in place. Roles and overrides keep referencing it by id."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self, actor_id: str, permission_id: str, data: PermissionUpdateInput
    ) -> Permission:
        """Apply the non-None fields of data to the permission."""
        allowed = await self._permission_checker.check(
            actor_id,
            SystemModule.ADMIN,
            PermissionAction.UPDATE,
            ResourceQualifier("permission"),
        )
        if not allowed:
            raise PermissionDenied("User may not update permissions")

        async with self._uow_factory() as uow:
            existing = await uow.permissions.get_by_id(permission_id)
            if not existing:
                raise NotFound("Permission", permission_id)

            changes = {
                k: v
                for k, v in {
                    "name": data.name,
                    "module": data.module,
                    "actions": data.actions,
                    "description": data.description,
                    "resource": data.resource,
                    "conditions": data.conditions,
                }.items()
                if v is not None
            }
            if data.clear_resource:
                changes["resource"] = None
            # replace() re-runs validation on the merged record
            updated = replace(existing, **changes)
            await uow.permissions.update(updated)

        logger.info("Permission %s updated by %s", permission_id, actor_id)
        return updated

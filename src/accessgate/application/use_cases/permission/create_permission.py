"""Create permission use case."""

import logging
from uuid import uuid4

from accessgate.application.dto.catalog_dto import PermissionCreateInput
from accessgate.application.ports import PermissionChecker
from accessgate.domain.entities import Permission
from accessgate.domain.exceptions import PermissionDenied, ValidationError
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule

logger = logging.getLogger(__name__)


class CreatePermissionUseCase:
    """Add a permission to the catalog."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(self, actor_id: str, data: PermissionCreateInput) -> Permission:
        """Create permission. Actor must be allowed to create catalog permissions."""
        allowed = await self._permission_checker.check(
            actor_id,
            SystemModule.ADMIN,
            PermissionAction.CREATE,
            ResourceQualifier("permission"),
        )
        if not allowed:
            raise PermissionDenied("User may not create permissions")

        permission = Permission(
            id=data.id or str(uuid4()),
            name=data.name,
            module=data.module,
            actions=data.actions,
            description=data.description,
            resource=data.resource,
            conditions=data.conditions,
        )
        async with self._uow_factory() as uow:
            if await uow.permissions.get_by_id(permission.id):
                raise ValidationError(f"Permission {permission.id} already exists")
            await uow.permissions.create(permission)

        logger.info("Permission %s (%s) created by %s", permission.id, permission.name, actor_id)
        return permission

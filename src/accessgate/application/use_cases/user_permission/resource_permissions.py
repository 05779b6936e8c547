"""Resource-scoped grant use cases."""

import logging
from datetime import UTC, datetime

from accessgate.application.dto.catalog_dto import ResourcePermissionInput
from accessgate.application.ports import PermissionChecker
from accessgate.domain.entities import ResourcePermission, UserPermission
from accessgate.domain.exceptions import NotFound, PermissionDenied, ValidationError
from accessgate.domain.value_objects import PermissionAction, SystemModule

logger = logging.getLogger(__name__)


class AddResourcePermissionUseCase:
    """Grant a permission's actions on one resource instance or a whole type."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self, actor_id: str, user_id: str, data: ResourcePermissionInput
    ) -> UserPermission:
        """Add or replace the entry identified by (type, id, permission)."""
        allowed = await self._permission_checker.check(
            actor_id, SystemModule.USERS, PermissionAction.ASSIGN
        )
        if not allowed:
            raise PermissionDenied("User may not assign permissions")

        entry = ResourcePermission(
            resource_type=data.resource_type,
            resource_id=data.resource_id,
            permission_id=data.permission_id,
            actions=data.actions,
        )
        async with self._uow_factory() as uow:
            permission = await uow.permissions.get_by_id(entry.permission_id)
            if not permission:
                raise NotFound("Permission", entry.permission_id)
            extra = entry.actions - permission.actions
            if extra:
                raise ValidationError(
                    f"Actions {sorted(extra)} are not part of permission {permission.id}"
                )
            record = await uow.user_permissions.get(user_id) or UserPermission(user_id=user_id)
            record.add_resource_permission(entry)
            record.updated_at = datetime.now(UTC)
            record.updated_by = actor_id
            await uow.user_permissions.save(record)

        logger.info(
            "Resource grant %s:%s -> %s for %s by %s",
            entry.resource_type,
            entry.resource_id or "*",
            entry.permission_id,
            user_id,
            actor_id,
        )
        return record


class RemoveResourcePermissionUseCase:
    """Remove one resource-scoped grant."""

    def __init__(
        self,
        unit_of_work_factory: type,
        permission_checker: PermissionChecker,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._permission_checker = permission_checker

    async def execute(
        self,
        actor_id: str,
        user_id: str,
        resource_type: str,
        resource_id: str | None,
        permission_id: str,
    ) -> UserPermission:
        """Remove the entry identified by (type, id, permission)."""
        allowed = await self._permission_checker.check(
            actor_id, SystemModule.USERS, PermissionAction.ASSIGN
        )
        if not allowed:
            raise PermissionDenied("User may not assign permissions")

        async with self._uow_factory() as uow:
            record = await uow.user_permissions.get(user_id)
            if not record or not record.remove_resource_permission(
                resource_type, resource_id, permission_id
            ):
                raise NotFound(
                    "ResourcePermission",
                    f"{user_id}/{resource_type}:{resource_id or '*'}/{permission_id}",
                )
            record.updated_at = datetime.now(UTC)
            record.updated_by = actor_id
            await uow.user_permissions.save(record)

        logger.info(
            "Resource grant %s:%s -> %s removed from %s by %s",
            resource_type,
            resource_id or "*",
            permission_id,
            user_id,
            actor_id,
        )
        return record

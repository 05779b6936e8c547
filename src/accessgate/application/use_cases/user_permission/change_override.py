"""Grant / restrict use case - one override change at a time."""

import logging
from datetime import UTC, datetime
from enum import StrEnum

from accessgate.application.ports import PermissionChecker
from accessgate.domain.entities import UserPermission
from accessgate.domain.exceptions import NotFound, PermissionDenied
from accessgate.domain.value_objects import PermissionAction, SystemModule

logger = logging.getLogger(__name__)


class OverrideChange(StrEnum):
    """Incremental change to a user's custom grants or restrictions."""

    GRANT = "grant"
    REVOKE_GRANT = "revoke_grant"
    RESTRICT = "restrict"
    UNRESTRICT = "unrestrict"


_ADDS = {OverrideChange.GRANT, OverrideChange.RESTRICT}


class ChangeOverrideUseCase:
    """Add or remove one custom grant or restriction for a user.

    Adding creates the override record lazily. Granting lifts a restriction on
    the same permission and restricting drops a grant, so a record never holds
    an id in both sets.
    """

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
        permission_id: str,
        change: OverrideChange,
    ) -> UserPermission:
        """Apply change for permission_id to user_id's override record."""
        allowed = await self._permission_checker.check(
            actor_id, SystemModule.USERS, PermissionAction.ASSIGN
        )
        if not allowed:
            raise PermissionDenied("User may not assign permissions")

        async with self._uow_factory() as uow:
            record = await uow.user_permissions.get(user_id)
            if change in _ADDS:
                if not await uow.permissions.get_by_id(permission_id):
                    raise NotFound("Permission", permission_id)
                record = record or UserPermission(user_id=user_id)
            elif record is None:
                raise NotFound("UserPermission", user_id)

            match change:
                case OverrideChange.GRANT:
                    record.grant(permission_id)
                case OverrideChange.REVOKE_GRANT:
                    record.revoke_grant(permission_id)
                case OverrideChange.RESTRICT:
                    record.restrict(permission_id)
                case OverrideChange.UNRESTRICT:
                    record.unrestrict(permission_id)

            record.updated_at = datetime.now(UTC)
            record.updated_by = actor_id
            await uow.user_permissions.save(record)

        logger.info("Override %s %s for %s by %s", change, permission_id, user_id, actor_id)
        return record

"""PostgreSQL user override repository implementation."""

import logging

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from accessgate.domain.entities import ResourcePermission, UserPermission
from accessgate.domain.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _entry_to_json(entry: ResourcePermission) -> dict:
    return {
        "resource_type": entry.resource_type,
        "resource_id": entry.resource_id,
        "permission_id": entry.permission_id,
        "actions": sorted(a.value for a in entry.actions),
    }


def _entry_from_json(data: dict) -> ResourcePermission:
    return ResourcePermission(
        resource_type=data["resource_type"],
        resource_id=data.get("resource_id"),
        permission_id=data["permission_id"],
        actions=data["actions"],
    )


def _entries_from_json(user_id: str, entries: list) -> list[ResourcePermission]:
    """Map stored resource grants, skipping entries that fail validation."""
    parsed = []
    for data in entries:
        try:
            parsed.append(_entry_from_json(data))
        except (AttributeError, KeyError, TypeError, ValidationError) as e:
            logger.warning("Skipping invalid resource grant of %s: %r (%s)", user_id, data, e)
    return parsed


class PostgresUserPermissionRepository:
    """Override record repository implementation (one row per user)."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get(self, user_id: str) -> UserPermission | None:
        """Get override record for user."""
        cur = await self._conn.execute(
            "SELECT user_id, role_id, custom_permissions, restricted_permissions, "
            "resource_permissions, updated_at, updated_by "
            "FROM user_permission WHERE user_id = %s",
            (user_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return UserPermission(
            user_id=r[0],
            role_id=r[1] or "",
            custom_permissions=r[2] or [],
            restricted_permissions=r[3] or [],
            resource_permissions=_entries_from_json(r[0], r[4] or []),
            updated_at=r[5],
            updated_by=r[6],
        )

    async def save(self, user_permission: UserPermission) -> None:
        """Insert or replace override record."""
        await self._conn.execute(
            "INSERT INTO user_permission (user_id, role_id, custom_permissions, "
            "restricted_permissions, resource_permissions, updated_at, updated_by) "
            "VALUES (%s, %s, %s, %s, %s, %s, %s) "
            "ON CONFLICT (user_id) DO UPDATE SET role_id=EXCLUDED.role_id, "
            "custom_permissions=EXCLUDED.custom_permissions, "
            "restricted_permissions=EXCLUDED.restricted_permissions, "
            "resource_permissions=EXCLUDED.resource_permissions, "
            "updated_at=EXCLUDED.updated_at, updated_by=EXCLUDED.updated_by",
            (
                user_permission.user_id,
                user_permission.role_id,
                sorted(user_permission.custom_permissions),
                sorted(user_permission.restricted_permissions),
                Jsonb([_entry_to_json(e) for e in user_permission.resource_permissions]),
                user_permission.updated_at,
                user_permission.updated_by,
            ),
        )

    async def delete(self, user_id: str) -> None:
        """Delete override record."""
        await self._conn.execute(
            "DELETE FROM user_permission WHERE user_id = %s",
            (user_id,),
        )

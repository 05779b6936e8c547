"""PostgreSQL permission repository implementation."""

import logging
from collections.abc import Iterable

from psycopg import AsyncConnection
from psycopg.types.json import Jsonb

from accessgate.domain.entities import Permission
from accessgate.domain.exceptions import ValidationError
from accessgate.domain.value_objects import SystemModule

logger = logging.getLogger(__name__)

_COLUMNS = "id, name, description, module, actions, resource, conditions"


def _to_permission(r: tuple) -> Permission:
    return Permission(
        id=r[0],
        name=r[1],
        description=r[2] or "",
        module=r[3],
        actions=r[4],
        resource=r[5],
        conditions=r[6],
    )


def _valid_permissions(rows: list[tuple]) -> list[Permission]:
    """Map rows, skipping any that no longer pass validation."""
    permissions = []
    for r in rows:
        try:
            permissions.append(_to_permission(r))
        except ValidationError as e:
            logger.warning("Skipping invalid permission row %s: %s", r[0], e)
    return permissions


def _params(permission: Permission) -> tuple:
    return (
        permission.name,
        permission.description,
        permission.module.value,
        sorted(a.value for a in permission.actions),
        permission.resource.encode() if permission.resource else None,
        Jsonb(permission.conditions) if permission.conditions is not None else None,
    )


class PostgresPermissionRepository:
    """Permission repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, permission_id: str) -> Permission | None:
        """Get permission by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE id = %s",
            (permission_id,),
        )
        r = await cur.fetchone()
        return _to_permission(r) if r else None

    async def list_by_ids(self, permission_ids: Iterable[str]) -> list[Permission]:
        """Get permissions for ids; ids without a row are omitted."""
        ids = sorted(set(permission_ids))
        if not ids:
            return []
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE id = ANY(%s) ORDER BY id",
            (ids,),
        )
        return _valid_permissions(await cur.fetchall())

    async def list_all(self) -> list[Permission]:
        """List the whole catalog."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission ORDER BY module, name"
        )
        return _valid_permissions(await cur.fetchall())

    async def list_by_module(self, module: SystemModule) -> list[Permission]:
        """List permissions of one module."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM permission WHERE module = %s ORDER BY name",
            (module.value,),
        )
        return _valid_permissions(await cur.fetchall())

    async def create(self, permission: Permission) -> Permission:
        """Create permission."""
        await self._conn.execute(
            f"INSERT INTO permission ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (permission.id, *_params(permission)),
        )
        return permission

    async def update(self, permission: Permission) -> None:
        """Update permission."""
        await self._conn.execute(
            "UPDATE permission SET name=%s, description=%s, module=%s, actions=%s, "
            "resource=%s, conditions=%s WHERE id=%s",
            (*_params(permission), permission.id),
        )

    async def delete(self, permission_id: str) -> None:
        """Delete permission. References from roles and overrides are left dangling."""
        await self._conn.execute(
            "DELETE FROM permission WHERE id = %s",
            (permission_id,),
        )

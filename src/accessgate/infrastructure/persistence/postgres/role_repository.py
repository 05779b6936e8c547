"""PostgreSQL role repository implementation."""

from psycopg import AsyncConnection

from accessgate.domain.entities import Role

_COLUMNS = "id, name, description, permissions, level, created_at, updated_at"


def _to_role(r: tuple) -> Role:
    return Role(
        id=r[0],
        name=r[1],
        description=r[2] or "",
        permissions=r[3] or [],
        level=r[4],
        created_at=r[5],
        updated_at=r[6],
    )


class PostgresRoleRepository:
    """Role repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, role_id: str) -> Role | None:
        """Get role by id."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE id = %s",
            (role_id,),
        )
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def get_by_name(self, name: str) -> Role | None:
        """Get role by name."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role WHERE name = %s",
            (name,),
        )
        r = await cur.fetchone()
        return _to_role(r) if r else None

    async def list_all(self) -> list[Role]:
        """List all roles, highest level first."""
        cur = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM role ORDER BY level DESC, name"
        )
        return [_to_role(r) for r in await cur.fetchall()]

    async def create(self, role: Role) -> Role:
        """Create role."""
        await self._conn.execute(
            f"INSERT INTO role ({_COLUMNS}) VALUES (%s, %s, %s, %s, %s, %s, %s)",
            (
                role.id,
                role.name,
                role.description,
                sorted(role.permissions),
                role.level,
                role.created_at,
                role.updated_at,
            ),
        )
        return role

    async def update(self, role: Role) -> None:
        """Update role."""
        await self._conn.execute(
            "UPDATE role SET name=%s, description=%s, permissions=%s, level=%s, updated_at=%s "
            "WHERE id=%s",
            (
                role.name,
                role.description,
                sorted(role.permissions),
                role.level,
                role.updated_at,
                role.id,
            ),
        )

    async def delete(self, role_id: str) -> None:
        """Delete role. Override records pointing at it are left dangling."""
        await self._conn.execute(
            "DELETE FROM role WHERE id = %s",
            (role_id,),
        )

"""PostgreSQL actor profile repository implementation."""

from psycopg import AsyncConnection

from accessgate.domain.entities import Actor


class PostgresActorRepository:
    """Actor repository implementation."""

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def get_by_id(self, actor_id: str) -> Actor | None:
        """Get actor profile by id."""
        cur = await self._conn.execute(
            "SELECT id, role_name, email, display_name FROM actor WHERE id = %s",
            (actor_id,),
        )
        r = await cur.fetchone()
        if not r:
            return None
        return Actor(id=r[0], role_name=r[1], email=r[2], display_name=r[3])

    async def get_role_name(self, actor_id: str) -> str | None:
        """Get the actor's declared role name."""
        cur = await self._conn.execute(
            "SELECT role_name FROM actor WHERE id = %s",
            (actor_id,),
        )
        r = await cur.fetchone()
        return r[0] if r else None

    async def save(self, actor: Actor) -> None:
        """Insert or replace actor profile."""
        await self._conn.execute(
            "INSERT INTO actor (id, role_name, email, display_name) VALUES (%s, %s, %s, %s) "
            "ON CONFLICT (id) DO UPDATE SET role_name=EXCLUDED.role_name, "
            "email=EXCLUDED.email, display_name=EXCLUDED.display_name",
            (actor.id, actor.role_name, actor.email, actor.display_name),
        )

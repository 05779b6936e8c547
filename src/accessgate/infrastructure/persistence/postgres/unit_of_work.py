"""PostgreSQL Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import psycopg
from psycopg_pool import AsyncConnectionPool

from accessgate.domain.exceptions import StoreUnavailable
from accessgate.infrastructure.persistence.postgres.actor_repository import (
    PostgresActorRepository,
)
from accessgate.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
)
from accessgate.infrastructure.persistence.postgres.role_repository import (
    PostgresRoleRepository,
)
from accessgate.infrastructure.persistence.postgres.user_permission_repository import (
    PostgresUserPermissionRepository,
)


class PostgresUnitOfWork:
    """PostgreSQL Unit of Work - one connection, one transaction.

    A read-only unit runs in a REPEATABLE READ READ ONLY transaction, so every
    query it issues sees the same snapshot.
    """

    def __init__(self, pool: AsyncConnectionPool, read_only: bool = False) -> None:
        self._pool = pool
        self._read_only = read_only
        self._conn: object | None = None
        self._conn_cm: object | None = None

    async def __aenter__(self) -> "PostgresUnitOfWork":
        self._conn_cm = self._pool.connection()
        self._conn = await self._conn_cm.__aenter__()
        if self._read_only:
            await self._conn.execute(
                "SET TRANSACTION ISOLATION LEVEL REPEATABLE READ READ ONLY"
            )
        self._permissions = PostgresPermissionRepository(self._conn)
        self._roles = PostgresRoleRepository(self._conn)
        self._user_permissions = PostgresUserPermissionRepository(self._conn)
        self._actors = PostgresActorRepository(self._conn)
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        if exc_type and self._conn:
            await self._conn.rollback()
        if self._conn_cm:
            await self._conn_cm.__aexit__(exc_type, exc_val, exc_tb)

    @property
    def permissions(self) -> PostgresPermissionRepository:
        return self._permissions

    @property
    def roles(self) -> PostgresRoleRepository:
        return self._roles

    @property
    def user_permissions(self) -> PostgresUserPermissionRepository:
        return self._user_permissions

    @property
    def actors(self) -> PostgresActorRepository:
        return self._actors

    async def commit(self) -> None:
        if self._conn:
            await self._conn.commit()

    async def rollback(self) -> None:
        if self._conn:
            await self._conn.rollback()


def create_uow_factory(pool: AsyncConnectionPool):
    """Create UnitOfWork factory (async context manager).

    Connection-level failures surface as StoreUnavailable.
    """

    @asynccontextmanager
    async def factory(read_only: bool = False) -> AsyncIterator[PostgresUnitOfWork]:
        try:
            async with PostgresUnitOfWork(pool, read_only=read_only) as uow:
                try:
                    yield uow
                    if read_only:
                        await uow.rollback()
                    else:
                        await uow.commit()
                except BaseException:
                    await uow.rollback()
                    raise
        except psycopg.OperationalError as e:
            raise StoreUnavailable(str(e)) from e

    return factory

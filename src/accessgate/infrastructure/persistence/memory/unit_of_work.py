"""In-memory Unit of Work implementation."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from accessgate.infrastructure.persistence.memory.repositories import (
    InMemoryActorRepository,
    InMemoryPermissionRepository,
    InMemoryRoleRepository,
    InMemoryUserPermissionRepository,
    _ChangeLog,
)
from accessgate.infrastructure.persistence.memory.store import InMemoryPolicyStore


class InMemoryUnitOfWork:
    """In-memory Unit of Work - private snapshot, buffered writes."""

    def __init__(self, store: InMemoryPolicyStore) -> None:
        self._store = store
        self._changes = _ChangeLog()
        tables = store.snapshot()
        self._permissions = InMemoryPermissionRepository(tables.permissions, self._changes)
        self._roles = InMemoryRoleRepository(tables.roles, self._changes)
        self._user_permissions = InMemoryUserPermissionRepository(
            tables.user_permissions, self._changes
        )
        self._actors = InMemoryActorRepository(tables.actors, self._changes)

    @property
    def permissions(self) -> InMemoryPermissionRepository:
        return self._permissions

    @property
    def roles(self) -> InMemoryRoleRepository:
        return self._roles

    @property
    def user_permissions(self) -> InMemoryUserPermissionRepository:
        return self._user_permissions

    @property
    def actors(self) -> InMemoryActorRepository:
        return self._actors

    async def commit(self) -> None:
        self._store.apply(self._changes.rows)
        self._changes.clear()

    async def rollback(self) -> None:
        self._changes.clear()


def create_memory_uow_factory(store: InMemoryPolicyStore):
    """Create UnitOfWork factory (async context manager) over an in-memory store."""

    @asynccontextmanager
    async def factory(read_only: bool = False) -> AsyncIterator[InMemoryUnitOfWork]:
        uow = InMemoryUnitOfWork(store)
        try:
            yield uow
            if not read_only:
                await uow.commit()
        except BaseException:
            await uow.rollback()
            raise

    return factory

"""Unit of Work port - transactional boundary and read snapshot."""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from accessgate.application.ports.repositories.actor_repository import ActorRepository
from accessgate.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from accessgate.application.ports.repositories.role_repository import RoleRepository
from accessgate.application.ports.repositories.user_permission_repository import (
    UserPermissionRepository,
)


class UnitOfWork(Protocol):
    """Unit of Work - manages transaction and repository access.

    All reads made through one Unit of Work observe one logical snapshot of
    the store, where the backend supports it.
    """

    @property
    def permissions(self) -> PermissionRepository: ...

    @property
    def roles(self) -> RoleRepository: ...

    @property
    def user_permissions(self) -> UserPermissionRepository: ...

    @property
    def actors(self) -> ActorRepository: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class UnitOfWorkFactory(Protocol):
    """Factory for creating UnitOfWork instances (async context managers)."""

    def __call__(self, read_only: bool = False) -> AbstractAsyncContextManager[UnitOfWork]: ...

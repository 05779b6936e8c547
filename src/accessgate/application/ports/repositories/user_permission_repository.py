"""User override repository port."""

from typing import Protocol

from accessgate.domain.entities import UserPermission


class UserPermissionRepository(Protocol):
    """Port for per-actor override records (one per actor)."""

    async def get(self, user_id: str) -> UserPermission | None: ...

    async def save(self, user_permission: UserPermission) -> None:
        """Insert or replace the record for ``user_permission.user_id``."""
        ...

    async def delete(self, user_id: str) -> None: ...

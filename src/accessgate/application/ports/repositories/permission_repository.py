"""Permission repository port."""

from collections.abc import Iterable
from typing import Protocol

from accessgate.domain.entities import Permission
from accessgate.domain.value_objects import SystemModule


class PermissionRepository(Protocol):
    """Port for the permission catalog."""

    async def get_by_id(self, permission_id: str) -> Permission | None: ...

    async def list_by_ids(self, permission_ids: Iterable[str]) -> list[Permission]:
        """Return permissions for the ids that exist; dangling ids are omitted."""
        ...

    async def list_all(self) -> list[Permission]: ...

    async def list_by_module(self, module: SystemModule) -> list[Permission]: ...

    async def create(self, permission: Permission) -> Permission: ...

    async def update(self, permission: Permission) -> None: ...

    async def delete(self, permission_id: str) -> None: ...

"""Role repository port."""

from typing import Protocol

from accessgate.domain.entities import Role


class RoleRepository(Protocol):
    """Port for the role registry."""

    async def get_by_id(self, role_id: str) -> Role | None: ...

    async def get_by_name(self, name: str) -> Role | None: ...

    async def list_all(self) -> list[Role]:
        """List roles, highest level first."""
        ...

    async def create(self, role: Role) -> Role: ...

    async def update(self, role: Role) -> None: ...

    async def delete(self, role_id: str) -> None: ...

"""Actor profile repository port."""

from typing import Protocol

from accessgate.domain.entities import Actor


class ActorRepository(Protocol):
    """Port for actor profiles. Authentication happens elsewhere."""

    async def get_by_id(self, actor_id: str) -> Actor | None: ...

    async def get_role_name(self, actor_id: str) -> str | None: ...

    async def save(self, actor: Actor) -> None: ...

"""Permission checker port - the authorization decision contract."""

from collections.abc import Sequence
from typing import Protocol

from accessgate.domain.policy import PermissionRequest, PermissionResult
from accessgate.domain.value_objects import ResourceQualifier


class PermissionChecker(Protocol):
    """Port for authorizing actors.

    ``authorize`` never raises for store or lookup failures; it fails closed
    with a reason instead. Cancellation propagates.
    """

    async def authorize(self, actor_id: str, request: PermissionRequest) -> PermissionResult: ...

    async def authorize_many(
        self, actor_id: str, requests: Sequence[PermissionRequest]
    ) -> list[PermissionResult]: ...

    async def check(
        self,
        actor_id: str,
        module: str,
        action: str,
        resource: ResourceQualifier | None = None,
    ) -> bool: ...

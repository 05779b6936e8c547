"""Policy snapshot - everything one evaluation reads, fetched up front."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from accessgate.domain.entities import Actor, Permission, Role, UserPermission
from accessgate.domain.exceptions import DanglingReference

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PolicySnapshot:
    """Immutable view of one actor's policy data.

    ``permissions`` holds the catalog entries referenced by the override record
    and the role. Ids absent from it are dangling.
    """

    actor: Actor
    user_permission: UserPermission | None = None
    role: Role | None = None
    permissions: Mapping[str, Permission] = field(default_factory=dict)

    def permission(self, permission_id: str, owner: str | None = None) -> Permission:
        """Return the catalog entry for an id or raise DanglingReference."""
        found = self.permissions.get(permission_id)
        if found is None:
            raise DanglingReference("Permission", permission_id, owner)
        return found

    def resolve(self, permission_ids: Iterable[str], owner: str) -> list[Permission]:
        """Resolve ids to permissions, dropping and logging dangling ones."""
        resolved = []
        for permission_id in sorted(permission_ids):
            try:
                resolved.append(self.permission(permission_id, owner))
            except DanglingReference as e:
                logger.warning("Ignoring dangling reference: %s", e)
        return resolved

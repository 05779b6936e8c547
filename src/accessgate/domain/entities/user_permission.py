"""UserPermission entity - per-actor overrides layered on the role."""

from dataclasses import dataclass, field
from datetime import datetime

from accessgate.domain.exceptions import ValidationError
from accessgate.domain.validation import parse_actions, parse_ids, require_text
from accessgate.domain.value_objects import PermissionAction


@dataclass(frozen=True)
class ResourcePermission:
    """Grant of a permission's actions on one resource instance or a whole type.

    ``resource_id`` of None is the wildcard (every instance of the type).
    """

    resource_type: str
    permission_id: str
    actions: frozenset[PermissionAction]
    resource_id: str | None = None

    def __post_init__(self) -> None:
        require_text(self.resource_type, "Resource type")
        require_text(self.permission_id, "Resource permission id")
        if self.resource_id is not None and not isinstance(self.resource_id, str):
            raise ValidationError("Resource id must be a string")
        object.__setattr__(self, "actions", parse_actions(self.actions))
        object.__setattr__(self, "resource_id", self.resource_id or None)

    @property
    def key(self) -> tuple[str, str | None, str]:
        """Identity within one UserPermission record."""
        return (self.resource_type, self.resource_id, self.permission_id)

    @property
    def is_wildcard(self) -> bool:
        return self.resource_id is None

    def covers(self, resource_type: str, resource_id: str | None) -> bool:
        """True if this entry applies to the given resource.

        A type-only request (no id) is covered only by a wildcard entry.
        """
        if self.resource_type != resource_type:
            return False
        return self.resource_id is None or self.resource_id == resource_id


@dataclass
class UserPermission:
    """Overrides for one actor: custom grants, restrictions and resource grants.

    Grants and restrictions are kept disjoint by the mutators below. A record
    read from the store that violates this is still evaluated safely because
    restriction wins during evaluation.
    """

    user_id: str
    role_id: str = ""
    custom_permissions: frozenset[str] = field(default_factory=frozenset)
    restricted_permissions: frozenset[str] = field(default_factory=frozenset)
    resource_permissions: tuple[ResourcePermission, ...] = ()
    updated_at: datetime | None = None
    updated_by: str | None = None

    def __post_init__(self) -> None:
        require_text(self.user_id, "UserPermission user_id")
        if not isinstance(self.role_id, str):
            raise ValidationError("UserPermission role_id must be a string")
        self.custom_permissions = parse_ids(self.custom_permissions, "Custom permissions")
        self.restricted_permissions = parse_ids(
            self.restricted_permissions, "Restricted permissions"
        )
        self.resource_permissions = tuple(self.resource_permissions)

    def referenced_permission_ids(self) -> frozenset[str]:
        """Every permission id this record points at."""
        return (
            self.custom_permissions
            | self.restricted_permissions
            | {rp.permission_id for rp in self.resource_permissions}
        )

    def assign_role(self, role_id: str) -> None:
        self.role_id = role_id

    def grant(self, permission_id: str) -> None:
        """Grant a permission explicitly; lifts a restriction on the same id."""
        self.custom_permissions = self.custom_permissions | {permission_id}
        self.restricted_permissions = self.restricted_permissions - {permission_id}

    def revoke_grant(self, permission_id: str) -> None:
        self.custom_permissions = self.custom_permissions - {permission_id}

    def restrict(self, permission_id: str) -> None:
        """Deny a permission explicitly; drops a custom grant on the same id."""
        self.restricted_permissions = self.restricted_permissions | {permission_id}
        self.custom_permissions = self.custom_permissions - {permission_id}

    def unrestrict(self, permission_id: str) -> None:
        self.restricted_permissions = self.restricted_permissions - {permission_id}

    def add_resource_permission(self, entry: ResourcePermission) -> None:
        """Add a resource grant, replacing one with the same identity in place."""
        entries = list(self.resource_permissions)
        for i, existing in enumerate(entries):
            if existing.key == entry.key:
                entries[i] = entry
                break
        else:
            entries.append(entry)
        self.resource_permissions = tuple(entries)

    def remove_resource_permission(
        self, resource_type: str, resource_id: str | None, permission_id: str
    ) -> bool:
        """Remove the entry with the given identity. Returns True if one was removed."""
        key = (resource_type, resource_id or None, permission_id)
        kept = tuple(rp for rp in self.resource_permissions if rp.key != key)
        removed = len(kept) != len(self.resource_permissions)
        self.resource_permissions = kept
        return removed

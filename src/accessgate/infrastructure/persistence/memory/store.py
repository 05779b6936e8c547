"""In-memory policy store - reference backend for tests and local runs."""

import copy
from dataclasses import dataclass, field, replace

from accessgate.domain.entities import Actor, Permission, Role, UserPermission


@dataclass
class PolicyTables:
    """The four logical tables, keyed by record id."""

    permissions: dict[str, Permission] = field(default_factory=dict)
    roles: dict[str, Role] = field(default_factory=dict)
    user_permissions: dict[str, UserPermission] = field(default_factory=dict)
    actors: dict[str, Actor] = field(default_factory=dict)


class InMemoryPolicyStore:
    """Process-local store. Each Unit of Work reads from a private snapshot.

    Committed tables are never mutated in place: every write swaps in a new
    dict, so a snapshot only shares references and costs nothing per record.
    Writes are buffered per Unit of Work and applied on commit, record by
    record, so concurrent units only overwrite the records they touched.
    """

    def __init__(self) -> None:
        self._tables = PolicyTables()

    def snapshot(self) -> PolicyTables:
        """Committed state as of now. Callers must not mutate the dicts."""
        return replace(self._tables)

    def apply(self, changes: dict[str, dict[str, object | None]]) -> None:
        """Apply buffered writes; a value of None deletes the key."""
        for table_name, rows in changes.items():
            table = dict(getattr(self._tables, table_name))
            for key, record in rows.items():
                if record is None:
                    table.pop(key, None)
                else:
                    table[key] = copy.deepcopy(record)
            setattr(self._tables, table_name, table)

    # Seeding helpers for tests and local bootstrapping.

    def add_permission(self, permission: Permission) -> Permission:
        self.apply({"permissions": {permission.id: permission}})
        return permission

    def add_role(self, role: Role) -> Role:
        self.apply({"roles": {role.id: role}})
        return role

    def add_actor(self, actor: Actor) -> Actor:
        self.apply({"actors": {actor.id: actor}})
        return actor

    def set_user_permission(self, user_permission: UserPermission) -> UserPermission:
        self.apply({"user_permissions": {user_permission.user_id: user_permission}})
        return user_permission

    def remove_permission(self, permission_id: str) -> None:
        self.apply({"permissions": {permission_id: None}})

    def remove_role(self, role_id: str) -> None:
        self.apply({"roles": {role_id: None}})

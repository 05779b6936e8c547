"""In-memory repository implementations over one Unit of Work's tables."""

import copy
from collections.abc import Iterable

from accessgate.domain.entities import Actor, Permission, Role, UserPermission
from accessgate.domain.value_objects import SystemModule


class _ChangeLog:
    """Buffered writes of one Unit of Work, per table."""

    def __init__(self) -> None:
        self.rows: dict[str, dict[str, object | None]] = {}

    def record(self, table: str, key: str, value: object | None) -> None:
        self.rows.setdefault(table, {})[key] = copy.deepcopy(value)

    def clear(self) -> None:
        self.rows.clear()


class _TableRepository:
    """Reads go to the shared snapshot dict; the first write takes a private copy."""

    table_name = ""

    def __init__(self, table: dict, changes: _ChangeLog) -> None:
        self._table = table
        self._owned = False
        self._changes = changes

    def _get(self, key: str):
        found = self._table.get(key)
        return copy.deepcopy(found) if found else None

    def _put(self, key: str, record: object) -> None:
        self._writable()[key] = copy.deepcopy(record)
        self._changes.record(self.table_name, key, record)

    def _remove(self, key: str) -> None:
        self._writable().pop(key, None)
        self._changes.record(self.table_name, key, None)

    def _writable(self) -> dict:
        if not self._owned:
            self._table = dict(self._table)
            self._owned = True
        return self._table


class InMemoryPermissionRepository(_TableRepository):
    """Permission repository over a dict."""

    table_name = "permissions"

    async def get_by_id(self, permission_id: str) -> Permission | None:
        return self._get(permission_id)

    async def list_by_ids(self, permission_ids: Iterable[str]) -> list[Permission]:
        return [
            copy.deepcopy(self._table[pid])
            for pid in sorted(set(permission_ids))
            if pid in self._table
        ]

    async def list_all(self) -> list[Permission]:
        return [copy.deepcopy(p) for p in sorted(self._table.values(), key=lambda p: (p.module, p.name))]

    async def list_by_module(self, module: SystemModule) -> list[Permission]:
        return [p for p in await self.list_all() if p.module == module]

    async def create(self, permission: Permission) -> Permission:
        self._put(permission.id, permission)
        return permission

    async def update(self, permission: Permission) -> None:
        self._put(permission.id, permission)

    async def delete(self, permission_id: str) -> None:
        self._remove(permission_id)


class InMemoryRoleRepository(_TableRepository):
    """Role repository over a dict."""

    table_name = "roles"

    async def get_by_id(self, role_id: str) -> Role | None:
        return self._get(role_id)

    async def get_by_name(self, name: str) -> Role | None:
        for role in self._table.values():
            if role.name == name:
                return copy.deepcopy(role)
        return None

    async def list_all(self) -> list[Role]:
        roles = sorted(self._table.values(), key=lambda r: (-r.level, r.name))
        return [copy.deepcopy(r) for r in roles]

    async def create(self, role: Role) -> Role:
        self._put(role.id, role)
        return role

    async def update(self, role: Role) -> None:
        self._put(role.id, role)

    async def delete(self, role_id: str) -> None:
        self._remove(role_id)


class InMemoryUserPermissionRepository(_TableRepository):
    """Override record repository over a dict keyed by user id."""

    table_name = "user_permissions"

    async def get(self, user_id: str) -> UserPermission | None:
        return self._get(user_id)

    async def save(self, user_permission: UserPermission) -> None:
        self._put(user_permission.user_id, user_permission)

    async def delete(self, user_id: str) -> None:
        self._remove(user_id)


class InMemoryActorRepository(_TableRepository):
    """Actor profile repository over a dict."""

    table_name = "actors"

    async def get_by_id(self, actor_id: str) -> Actor | None:
        return self._get(actor_id)

    async def get_role_name(self, actor_id: str) -> str | None:
        found = self._table.get(actor_id)
        return found.role_name if found else None

    async def save(self, actor: Actor) -> None:
        self._put(actor.id, actor)

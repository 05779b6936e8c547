"""Pytest fixtures for AccessGate tests."""

from __future__ import annotations

import pytest

from accessgate.domain.entities import Actor, Permission, Role, UserPermission
from accessgate.domain.value_objects import PermissionAction, SystemModule
from accessgate.infrastructure.permission.permission_checker import AccessGatePermissionChecker
from accessgate.infrastructure.persistence.memory import (
    InMemoryPolicyStore,
    create_memory_uow_factory,
)


# --- Builders ---


def make_permission(
    pid: str,
    module: str = SystemModule.HR,
    actions: tuple[str, ...] = (PermissionAction.READ,),
    resource: str | None = None,
    name: str | None = None,
) -> Permission:
    """Catalog permission with sensible defaults."""
    return Permission(
        id=pid,
        name=name or pid,
        module=module,
        actions=frozenset(actions),
        resource=resource,
    )


def make_role(rid: str, name: str, permissions: list[str], level: int = 0) -> Role:
    return Role(id=rid, name=name, permissions=frozenset(permissions), level=level)


def seed_employee(store: InMemoryPolicyStore, actor_id: str = "u-emp") -> Actor:
    """Actor with role "employee" granting HR read via perm_hr_read."""
    store.add_permission(make_permission("perm_hr_read"))
    store.add_role(make_role("role_employee", "employee", ["perm_hr_read"], level=30))
    return store.add_actor(Actor(id=actor_id, role_name="employee"))


def seed_overrides(store: InMemoryPolicyStore, user_id: str, **fields) -> UserPermission:
    return store.set_user_permission(UserPermission(user_id=user_id, **fields))


# --- Fixtures ---


@pytest.fixture
def store() -> InMemoryPolicyStore:
    """Empty in-memory policy store."""
    return InMemoryPolicyStore()


@pytest.fixture
def uow_factory(store: InMemoryPolicyStore):
    """UnitOfWork factory over the store fixture."""
    return create_memory_uow_factory(store)


@pytest.fixture
def checker(uow_factory) -> AccessGatePermissionChecker:
    """Real permission checker over the in-memory store."""
    return AccessGatePermissionChecker(uow_factory, timeout_seconds=1.0)


@pytest.fixture
def mock_permission_checker():
    """AsyncMock for PermissionChecker - returns True by default."""
    from unittest.mock import AsyncMock

    mock = AsyncMock()
    mock.check.return_value = True
    return mock

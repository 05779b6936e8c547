"""Tests for the in-memory Unit of Work and repositories."""

import pytest

from accessgate.domain.entities import Actor, UserPermission
from accessgate.domain.value_objects import SystemModule

from tests.conftest import make_permission, make_role


@pytest.mark.asyncio
async def test_writes_visible_after_commit(uow_factory) -> None:
    async with uow_factory() as uow:
        await uow.permissions.create(make_permission("p1"))
        # own writes are visible inside the unit
        assert await uow.permissions.get_by_id("p1") is not None
    async with uow_factory(read_only=True) as uow:
        assert (await uow.permissions.get_by_id("p1")).id == "p1"


@pytest.mark.asyncio
async def test_error_rolls_back(uow_factory) -> None:
    with pytest.raises(RuntimeError):
        async with uow_factory() as uow:
            await uow.permissions.create(make_permission("p1"))
            raise RuntimeError("abort")
    async with uow_factory(read_only=True) as uow:
        assert await uow.permissions.get_by_id("p1") is None


@pytest.mark.asyncio
async def test_read_only_unit_discards_writes(uow_factory) -> None:
    async with uow_factory(read_only=True) as uow:
        await uow.actors.save(Actor(id="u1", role_name="user"))
    async with uow_factory(read_only=True) as uow:
        assert await uow.actors.get_by_id("u1") is None


@pytest.mark.asyncio
async def test_returned_records_are_copies(store, uow_factory) -> None:
    store.set_user_permission(UserPermission(user_id="u1"))
    async with uow_factory(read_only=True) as uow:
        record = await uow.user_permissions.get("u1")
        record.grant("p1")
        assert (await uow.user_permissions.get("u1")).custom_permissions == frozenset()


@pytest.mark.asyncio
async def test_concurrent_units_only_overwrite_touched_records(uow_factory) -> None:
    async with uow_factory() as first:
        async with uow_factory() as second:
            await second.roles.create(make_role("r2", "second", []))
        await first.roles.create(make_role("r1", "first", []))
    async with uow_factory(read_only=True) as uow:
        assert {r.id for r in await uow.roles.list_all()} == {"r1", "r2"}


@pytest.mark.asyncio
async def test_list_by_ids_omits_missing(store, uow_factory) -> None:
    store.add_permission(make_permission("a"))
    store.add_permission(make_permission("b"))
    async with uow_factory(read_only=True) as uow:
        found = await uow.permissions.list_by_ids(["b", "gone", "a", "a"])
    assert [p.id for p in found] == ["a", "b"]


@pytest.mark.asyncio
async def test_roles_ordered_by_level(store, uow_factory) -> None:
    store.add_role(make_role("r_user", "user", [], level=10))
    store.add_role(make_role("r_admin", "admin", [], level=90))
    store.add_role(make_role("r_mgr", "manager", [], level=70))
    async with uow_factory(read_only=True) as uow:
        roles = await uow.roles.list_all()
    assert [r.name for r in roles] == ["admin", "manager", "user"]


@pytest.mark.asyncio
async def test_list_by_module_and_role_name(store, uow_factory) -> None:
    store.add_permission(make_permission("hr1", module="hr"))
    store.add_permission(make_permission("crm1", module="crm"))
    store.add_actor(Actor(id="u1", role_name="employee"))
    async with uow_factory(read_only=True) as uow:
        hr = await uow.permissions.list_by_module(SystemModule.HR)
        role_name = await uow.actors.get_role_name("u1")
        missing = await uow.actors.get_role_name("u2")
    assert [p.id for p in hr] == ["hr1"]
    assert role_name == "employee"
    assert missing is None


def test_snapshot_shares_committed_tables(store) -> None:
    store.add_permission(make_permission("p1"))
    first, second = store.snapshot(), store.snapshot()
    assert first.permissions is second.permissions


def test_commit_swaps_tables_instead_of_mutating(store) -> None:
    store.add_permission(make_permission("p1"))
    before = store.snapshot()
    store.add_permission(make_permission("p2"))
    assert set(before.permissions) == {"p1"}
    assert set(store.snapshot().permissions) == {"p1", "p2"}


@pytest.mark.asyncio
async def test_uncommitted_write_stays_private(store, uow_factory) -> None:
    store.add_permission(make_permission("p1"))
    async with uow_factory() as writer:
        await writer.permissions.delete("p1")
        async with uow_factory(read_only=True) as reader:
            assert await reader.permissions.get_by_id("p1") is not None
        assert set(store.snapshot().permissions) == {"p1"}
    assert store.snapshot().permissions == {}

"""Unit tests for the PostgreSQL adapter over mocked psycopg connections."""

from unittest.mock import AsyncMock, MagicMock

import psycopg
import pytest

from accessgate.domain.entities import ResourcePermission, UserPermission
from accessgate.domain.exceptions import StoreUnavailable
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule
from accessgate.infrastructure.persistence.postgres.permission_repository import (
    PostgresPermissionRepository,
    _to_permission,
)
from accessgate.infrastructure.persistence.postgres.role_repository import _to_role
from accessgate.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from accessgate.infrastructure.persistence.postgres.user_permission_repository import (
    PostgresUserPermissionRepository,
    _entries_from_json,
    _entry_from_json,
)

READ_ONLY_STATEMENT = "SET TRANSACTION ISOLATION LEVEL REPEATABLE READ READ ONLY"


def _connection(rows: list | None = None, row: tuple | None = None) -> MagicMock:
    cursor = MagicMock()
    cursor.fetchall = AsyncMock(return_value=rows or [])
    cursor.fetchone = AsyncMock(return_value=row)
    conn = MagicMock()
    conn.execute = AsyncMock(return_value=cursor)
    conn.commit = AsyncMock()
    conn.rollback = AsyncMock()
    return conn


def _pool(conn: MagicMock) -> MagicMock:
    connection_cm = MagicMock()
    connection_cm.__aenter__ = AsyncMock(return_value=conn)
    connection_cm.__aexit__ = AsyncMock(return_value=False)
    pool = MagicMock()
    pool.connection.return_value = connection_cm
    return pool


class TestUnitOfWork:
    """Transaction handling of create_uow_factory."""

    @pytest.mark.asyncio
    async def test_read_only_unit_uses_snapshot_and_rolls_back(self) -> None:
        conn = _connection()
        factory = create_uow_factory(_pool(conn))

        async with factory(read_only=True):
            pass

        conn.execute.assert_awaited_once_with(READ_ONLY_STATEMENT)
        conn.rollback.assert_awaited_once()
        conn.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_write_unit_commits(self) -> None:
        conn = _connection()
        factory = create_uow_factory(_pool(conn))

        async with factory() as uow:
            await uow.user_permissions.delete("u1")

        assert READ_ONLY_STATEMENT not in [c.args[0] for c in conn.execute.await_args_list]
        conn.commit.assert_awaited_once()
        conn.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_error_rolls_back_and_propagates(self) -> None:
        conn = _connection()
        factory = create_uow_factory(_pool(conn))

        with pytest.raises(RuntimeError):
            async with factory():
                raise RuntimeError("abort")

        conn.rollback.assert_awaited()
        conn.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_connection_failure_is_store_unavailable(self) -> None:
        pool = _pool(_connection())
        pool.connection.return_value.__aenter__.side_effect = psycopg.OperationalError("down")
        factory = create_uow_factory(pool)

        with pytest.raises(StoreUnavailable):
            async with factory(read_only=True):
                pass

    @pytest.mark.asyncio
    async def test_query_failure_is_store_unavailable(self) -> None:
        conn = _connection()
        factory = create_uow_factory(_pool(conn))

        with pytest.raises(StoreUnavailable):
            async with factory(read_only=True) as uow:
                conn.execute.side_effect = psycopg.OperationalError("connection reset")
                await uow.roles.get_by_id("role_employee")

        conn.commit.assert_not_awaited()


class TestRowMapping:
    """Row and JSONB mapping to domain entities."""

    def test_permission_row(self) -> None:
        permission = _to_permission(
            ("perm_leave", "Approve Leave", None, "hr", ["read", "approve"], "leave:l1", {"k": 1})
        )
        assert permission.module is SystemModule.HR
        assert permission.actions == {PermissionAction.READ, PermissionAction.APPROVE}
        assert permission.resource == ResourceQualifier("leave", "l1")
        assert permission.description == ""
        assert permission.conditions == {"k": 1}

    def test_role_row_with_null_columns(self) -> None:
        role = _to_role(("role_user", "user", None, None, 10, None, None))
        assert role.permissions == frozenset()
        assert role.description == ""

    def test_resource_entry(self) -> None:
        entry = _entry_from_json(
            {"resource_type": "leave", "resource_id": None, "permission_id": "p", "actions": ["approve"]}
        )
        assert entry.is_wildcard
        assert entry.actions == {PermissionAction.APPROVE}

    def test_invalid_resource_entries_are_skipped(self) -> None:
        entries = _entries_from_json(
            "u1",
            [
                {"resource_type": "leave", "resource_id": "l1", "permission_id": "p", "actions": ["approve"]},
                {"resource_type": "leave", "permission_id": "p", "actions": ["fly"]},
                {"permission_id": "p", "actions": ["read"]},
                "garbage",
            ],
        )
        assert [e.resource_id for e in entries] == ["l1"]


class TestPermissionRepository:
    """PostgresPermissionRepository queries."""

    @pytest.mark.asyncio
    async def test_list_by_ids_deduplicates_and_skips_invalid_rows(self) -> None:
        conn = _connection(
            rows=[
                ("perm_a", "A", "", "hr", ["read"], None, None),
                ("perm_old", "Old", "", "payroll", ["read"], None, None),
            ]
        )
        repo = PostgresPermissionRepository(conn)

        found = await repo.list_by_ids(["perm_old", "perm_a", "perm_a"])

        assert [p.id for p in found] == ["perm_a"]
        assert conn.execute.await_args.args[1] == (["perm_a", "perm_old"],)

    @pytest.mark.asyncio
    async def test_list_by_ids_empty_skips_query(self) -> None:
        conn = _connection()
        assert await PostgresPermissionRepository(conn).list_by_ids([]) == []
        conn.execute.assert_not_awaited()


class TestUserPermissionRepository:
    """PostgresUserPermissionRepository queries."""

    @pytest.mark.asyncio
    async def test_get_maps_null_columns(self) -> None:
        conn = _connection(row=("u1", None, None, ["perm_b"], None, None, None))

        record = await PostgresUserPermissionRepository(conn).get("u1")

        assert record.role_id == ""
        assert record.custom_permissions == frozenset()
        assert record.restricted_permissions == {"perm_b"}
        assert record.resource_permissions == ()

    @pytest.mark.asyncio
    async def test_get_missing(self) -> None:
        conn = _connection(row=None)
        assert await PostgresUserPermissionRepository(conn).get("u1") is None

    @pytest.mark.asyncio
    async def test_save_writes_sorted_ids_and_jsonb(self) -> None:
        conn = _connection()
        record = UserPermission(
            user_id="u1",
            custom_permissions={"b", "a"},
            resource_permissions=[ResourcePermission("goal", "p", ["read"], resource_id="g1")],
        )

        await PostgresUserPermissionRepository(conn).save(record)

        params = conn.execute.await_args.args[1]
        assert params[2] == ["a", "b"]
        assert params[4].obj == [
            {"resource_type": "goal", "resource_id": "g1", "permission_id": "p", "actions": ["read"]}
        ]

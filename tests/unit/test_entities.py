"""Unit tests for entities, value objects and boundary validation."""

import pytest

from accessgate.domain.entities import Permission, ResourcePermission, Role, UserPermission
from accessgate.domain.exceptions import ValidationError
from accessgate.domain.validation import parse_actions, parse_module, parse_resource
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule


# --- ResourceQualifier ---


def test_resource_qualifier_parse_type_and_id() -> None:
    q = ResourceQualifier.parse("document:42")
    assert q == ResourceQualifier("document", "42")
    assert q.encode() == "document:42"


def test_resource_qualifier_parse_type_only() -> None:
    """Missing or empty id means any instance of the type."""
    assert ResourceQualifier.parse("document") == ResourceQualifier("document")
    assert ResourceQualifier.parse("document:").id is None
    assert str(ResourceQualifier("leave")) == "leave"


def test_resource_qualifier_rejects_empty_type() -> None:
    with pytest.raises(ValidationError):
        ResourceQualifier.parse(":42")


# --- validation ---


def test_parse_module_and_actions() -> None:
    assert parse_module("time-tracking") is SystemModule.TIME_TRACKING
    assert parse_actions(["read", "approve"]) == {PermissionAction.READ, PermissionAction.APPROVE}


def test_parse_module_unknown() -> None:
    with pytest.raises(ValidationError, match="Unknown module"):
        parse_module("payroll")


def test_parse_actions_rejects_empty_and_string() -> None:
    with pytest.raises(ValidationError, match="must not be empty"):
        parse_actions([])
    with pytest.raises(ValidationError):
        parse_actions("read")


def test_parse_resource_blank_is_none() -> None:
    assert parse_resource(None) is None
    assert parse_resource("  ") is None
    assert parse_resource("task:t1") == ResourceQualifier("task", "t1")


# --- Permission / Role ---


def test_permission_coerces_strings() -> None:
    """Module, actions and resource given as strings are normalized."""
    p = Permission(
        id="perm_leave",
        name="Approve Leave",
        module="hr",
        actions=["approve"],
        resource="leave",
    )
    assert p.module is SystemModule.HR
    assert p.actions == frozenset({PermissionAction.APPROVE})
    assert p.resource == ResourceQualifier("leave")


def test_permission_rejects_unknown_action() -> None:
    with pytest.raises(ValidationError, match="Unknown action"):
        Permission(id="p", name="p", module="hr", actions=["fly"])


def test_permission_requires_name() -> None:
    with pytest.raises(ValidationError):
        Permission(id="p", name="  ", module="hr", actions=["read"])


def test_role_permissions_frozen_and_level_checked() -> None:
    role = Role(id="r1", name="auditor", permissions=["a", "b", "a"])
    assert role.permissions == frozenset({"a", "b"})
    with pytest.raises(ValidationError):
        Role(id="r2", name="x", level="high")
    with pytest.raises(ValidationError):
        Role(id="r3", name="x", permissions="perm_a")


@pytest.mark.parametrize(
    "fields",
    [
        {"name": 5},
        {"name": "x", "permissions": [1, "perm_a"]},
        {"name": "x", "permissions": ["perm_a", ""]},
        {"name": "x", "permissions": 3},
        {"name": "x", "description": None},
    ],
)
def test_role_rejects_wrong_types(fields: dict) -> None:
    with pytest.raises(ValidationError):
        Role(id="r1", **fields)


def test_permission_rejects_wrong_types() -> None:
    with pytest.raises(ValidationError):
        Permission(id="p", name=5, module="hr", actions=["read"])
    with pytest.raises(ValidationError):
        Permission(id="p", name="x", module="hr", actions=["read"], resource=5)


def test_resource_qualifier_rejects_wrong_types() -> None:
    with pytest.raises(ValidationError):
        ResourceQualifier(type=5)
    with pytest.raises(ValidationError):
        ResourceQualifier(type="goal", id=7)


# --- ResourcePermission ---


def test_resource_permission_covers_instance() -> None:
    entry = ResourcePermission("document", "perm_doc", ["read"], resource_id="42")
    assert entry.covers("document", "42")
    assert not entry.covers("document", "7")
    assert not entry.covers("folder", "42")


def test_resource_permission_type_only_request_needs_wildcard() -> None:
    """A type-only request is covered only by a wildcard entry."""
    instance = ResourcePermission("document", "perm_doc", ["read"], resource_id="42")
    wildcard = ResourcePermission("document", "perm_doc", ["read"])
    assert not instance.covers("document", None)
    assert wildcard.is_wildcard
    assert wildcard.covers("document", None)
    assert wildcard.covers("document", "7")


def test_resource_permission_empty_id_is_wildcard() -> None:
    assert ResourcePermission("goal", "p", ["approve"], resource_id="").is_wildcard


def test_resource_permission_rejects_wrong_types() -> None:
    with pytest.raises(ValidationError):
        ResourcePermission(7, "p", ["read"])
    with pytest.raises(ValidationError):
        ResourcePermission("goal", 1, ["read"])
    with pytest.raises(ValidationError):
        ResourcePermission("goal", "p", ["read"], resource_id=3)


# --- UserPermission ---


def test_grant_and_restrict_stay_disjoint() -> None:
    up = UserPermission(user_id="u1")
    up.grant("p1")
    up.restrict("p1")
    assert up.restricted_permissions == {"p1"}
    assert up.custom_permissions == frozenset()
    up.grant("p1")
    assert up.custom_permissions == {"p1"}
    assert up.restricted_permissions == frozenset()


def test_user_permission_rejects_non_string_ids() -> None:
    with pytest.raises(ValidationError):
        UserPermission(user_id="u1", custom_permissions=[1])
    with pytest.raises(ValidationError):
        UserPermission(user_id="u1", restricted_permissions=["p", None])
    with pytest.raises(ValidationError):
        UserPermission(user_id="u1", role_id=None)


def test_revoke_and_unrestrict() -> None:
    up = UserPermission(user_id="u1", custom_permissions={"a"}, restricted_permissions={"b"})
    up.revoke_grant("a")
    up.unrestrict("b")
    assert not up.custom_permissions
    assert not up.restricted_permissions


def test_add_resource_permission_replaces_same_key() -> None:
    up = UserPermission(user_id="u1")
    up.add_resource_permission(ResourcePermission("goal", "p", ["read"], "g1"))
    up.add_resource_permission(ResourcePermission("goal", "p", ["approve"], "g1"))
    up.add_resource_permission(ResourcePermission("goal", "p", ["read"], "g2"))
    assert len(up.resource_permissions) == 2
    assert up.resource_permissions[0].actions == {PermissionAction.APPROVE}


def test_remove_resource_permission() -> None:
    up = UserPermission(
        user_id="u1",
        resource_permissions=[ResourcePermission("goal", "p", ["read"])],
    )
    assert not up.remove_resource_permission("goal", "g1", "p")
    assert up.remove_resource_permission("goal", None, "p")
    assert up.resource_permissions == ()


def test_referenced_permission_ids() -> None:
    up = UserPermission(
        user_id="u1",
        custom_permissions={"a"},
        restricted_permissions={"b"},
        resource_permissions=[ResourcePermission("goal", "c", ["read"])],
    )
    assert up.referenced_permission_ids() == {"a", "b", "c"}


def test_user_permission_requires_user_id() -> None:
    with pytest.raises(ValidationError):
        UserPermission(user_id="")

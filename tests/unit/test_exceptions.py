"""Unit tests for domain exceptions."""

import pytest

from accessgate.domain.exceptions import (
    AccessGateError,
    ActorNotFound,
    DanglingReference,
    NotFound,
    PermissionDenied,
    StoreUnavailable,
    ValidationError,
)


@pytest.mark.parametrize(
    "exc_type",
    [PermissionDenied, NotFound, ValidationError, ActorNotFound, StoreUnavailable, DanglingReference],
)
def test_exceptions_inherit_accessgate_error(exc_type) -> None:
    """Every domain exception is catchable as AccessGateError."""
    assert issubclass(exc_type, AccessGateError)


def test_raise_not_found_catchable_as_accessgate_error() -> None:
    """NotFound can be caught as AccessGateError."""
    with pytest.raises(AccessGateError):
        raise NotFound("Role", "role_x")


def test_actor_not_found_carries_id() -> None:
    err = ActorNotFound("u-404")
    assert err.actor_id == "u-404"
    assert str(err) == "Actor not found: u-404"


def test_dangling_reference_message_names_owner() -> None:
    """DanglingReference says what is missing and who points at it."""
    err = DanglingReference("Permission", "perm_gone", "role employee")
    assert err.kind == "Permission"
    assert err.ref_id == "perm_gone"
    assert str(err) == "Permission perm_gone does not resolve (referenced by role employee)"


def test_dangling_reference_without_owner() -> None:
    assert str(DanglingReference("Role", "role_x")) == "Role role_x does not resolve"


def test_exception_message_preserved() -> None:
    """Exception message is preserved when raised."""
    msg = "User may not create roles"
    with pytest.raises(PermissionDenied, match=msg):
        raise PermissionDenied(msg)

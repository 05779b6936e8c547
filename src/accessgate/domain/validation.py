"""Boundary coercion for module names, actions and resource qualifiers."""

from collections.abc import Iterable

from accessgate.domain.exceptions import ValidationError
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule


def parse_module(value: str | SystemModule) -> SystemModule:
    """Return the SystemModule for value or raise ValidationError."""
    try:
        return SystemModule(value)
    except ValueError:
        raise ValidationError(f"Unknown module: {value!r}") from None


def parse_action(value: str | PermissionAction) -> PermissionAction:
    """Return the PermissionAction for value or raise ValidationError."""
    try:
        return PermissionAction(value)
    except ValueError:
        raise ValidationError(f"Unknown action: {value!r}") from None


def parse_actions(values: Iterable[str | PermissionAction]) -> frozenset[PermissionAction]:
    """Parse a non-empty action set."""
    if isinstance(values, str):
        raise ValidationError("Actions must be a list, not a string")
    actions = frozenset(parse_action(v) for v in values)
    if not actions:
        raise ValidationError("Action set must not be empty")
    return actions


def parse_resource(value: str | ResourceQualifier | None) -> ResourceQualifier | None:
    """Parse an optional ``type`` / ``type:id`` qualifier."""
    if value is None or isinstance(value, ResourceQualifier):
        return value
    if not isinstance(value, str):
        raise ValidationError(f"Resource must be a string, got {value!r}")
    if not value.strip():
        return None
    return ResourceQualifier.parse(value)


def require_text(value: object, label: str) -> str:
    """Return value if it is a non-blank string, else raise ValidationError."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label} must be a non-empty string")
    return value


def parse_ids(values: Iterable[str], label: str) -> frozenset[str]:
    """Parse a collection of record ids; every id must be a non-empty string."""
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise ValidationError(f"{label} must be a collection of ids")
    ids = list(values)
    for value in ids:
        if not isinstance(value, str) or not value:
            raise ValidationError(f"{label} must contain only non-empty string ids, got {value!r}")
    return frozenset(ids)

"""JSON shapes for API responses and request parsing helpers."""

from typing import Any

from accessgate.domain.entities import Permission, Role, UserPermission
from accessgate.domain.exceptions import ValidationError
from accessgate.domain.policy import PermissionRequest
from accessgate.domain.value_objects import ResourceQualifier


def permission_to_dict(p: Permission) -> dict[str, Any]:
    return {
        "id": p.id,
        "name": p.name,
        "description": p.description,
        "module": p.module.value,
        "actions": sorted(a.value for a in p.actions),
        "resource": p.resource.encode() if p.resource else None,
        "conditions": p.conditions,
    }


def role_to_dict(r: Role) -> dict[str, Any]:
    return {
        "id": r.id,
        "name": r.name,
        "description": r.description,
        "permissions": sorted(r.permissions),
        "level": r.level,
        "created_at": r.created_at.isoformat() if r.created_at else None,
        "updated_at": r.updated_at.isoformat() if r.updated_at else None,
    }


def user_permission_to_dict(up: UserPermission) -> dict[str, Any]:
    return {
        "user_id": up.user_id,
        "role_id": up.role_id or None,
        "custom_permissions": sorted(up.custom_permissions),
        "restricted_permissions": sorted(up.restricted_permissions),
        "resource_permissions": [
            {
                "resource_type": rp.resource_type,
                "resource_id": rp.resource_id,
                "permission_id": rp.permission_id,
                "actions": sorted(a.value for a in rp.actions),
            }
            for rp in up.resource_permissions
        ],
        "updated_at": up.updated_at.isoformat() if up.updated_at else None,
        "updated_by": up.updated_by,
    }


def parse_resource(value: Any) -> ResourceQualifier | None:
    """Accept ``{"type": ..., "id": ...}`` or a ``type[:id]`` string."""
    if value is None:
        return None
    if isinstance(value, str):
        return ResourceQualifier.parse(value)
    if isinstance(value, dict):
        resource_id = value.get("id")
        return ResourceQualifier(
            type=value.get("type") or "",
            id=str(resource_id) if resource_id not in (None, "") else None,
        )
    raise ValidationError("resource must be an object or a string")


def parse_permission_request(body: Any) -> PermissionRequest:
    """Build a PermissionRequest from ``{module, action, resource?}``."""
    if not isinstance(body, dict):
        raise ValidationError("request must be an object")
    try:
        module = body["module"]
        action = body["action"]
    except KeyError as e:
        raise ValidationError(f"Missing required field: {e}") from None
    if not isinstance(module, str) or not isinstance(action, str):
        raise ValidationError("module and action must be strings")
    return PermissionRequest(
        module=module, action=action, resource=parse_resource(body.get("resource"))
    )

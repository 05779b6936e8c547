"""Matching of catalog permissions against requests."""

from collections.abc import Iterable

from accessgate.domain.entities import Permission
from accessgate.domain.policy.request import PermissionRequest


def permission_matches(permission: Permission, request: PermissionRequest) -> bool:
    """True if permission covers the request.

    Module and action must match. A resource qualifier is only compared when
    both sides declare one: types must be equal and a permission bound to an
    instance id only covers that id. A permission without a qualifier covers
    every resource of its module.
    """
    if permission.module != request.module:
        return False
    if request.action not in permission.actions:
        return False
    if permission.resource is not None and request.resource is not None:
        if permission.resource.type != request.resource.type:
            return False
        if permission.resource.id is not None and permission.resource.id != request.resource.id:
            return False
    return True


def any_match(permissions: Iterable[Permission], request: PermissionRequest) -> bool:
    return any(permission_matches(p, request) for p in permissions)

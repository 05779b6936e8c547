"""Domain entities."""

from accessgate.domain.entities.actor import Actor
from accessgate.domain.entities.permission import Permission
from accessgate.domain.entities.role import Role
from accessgate.domain.entities.user_permission import ResourcePermission, UserPermission

__all__ = [
    "Actor",
    "Permission",
    "ResourcePermission",
    "Role",
    "UserPermission",
]

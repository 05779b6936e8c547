"""Repository ports."""

from accessgate.application.ports.repositories.actor_repository import ActorRepository
from accessgate.application.ports.repositories.permission_repository import (
    PermissionRepository,
)
from accessgate.application.ports.repositories.role_repository import RoleRepository
from accessgate.application.ports.repositories.user_permission_repository import (
    UserPermissionRepository,
)

__all__ = [
    "ActorRepository",
    "PermissionRepository",
    "RoleRepository",
    "UserPermissionRepository",
]

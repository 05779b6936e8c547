"""Administration DTOs for catalog, roles and overrides."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class PermissionCreateInput:
    """Input for creating a catalog permission."""

    name: str
    module: str
    actions: list[str]
    description: str = ""
    resource: str | None = None  # "type" or "type:id"
    conditions: dict[str, Any] | None = None
    id: str | None = None


@dataclass
class PermissionUpdateInput:
    """Partial update of a catalog permission; None leaves a field unchanged."""

    name: str | None = None
    module: str | None = None
    actions: list[str] | None = None
    description: str | None = None
    resource: str | None = None
    clear_resource: bool = False
    conditions: dict[str, Any] | None = None


@dataclass
class RoleCreateInput:
    """Input for creating a role."""

    name: str
    description: str = ""
    permissions: list[str] = field(default_factory=list)
    level: int = 0
    id: str | None = None


@dataclass
class RoleUpdateInput:
    """Partial update of a role; None leaves a field unchanged."""

    name: str | None = None
    description: str | None = None
    permissions: list[str] | None = None
    level: int | None = None


@dataclass
class ResourcePermissionInput:
    """Input for a resource-scoped grant. ``resource_id`` None is the wildcard."""

    resource_type: str
    permission_id: str
    actions: list[str]
    resource_id: str | None = None


@dataclass
class CatalogSeedResult:
    """Outcome of seeding the default catalog."""

    permissions_created: int
    roles_created: int

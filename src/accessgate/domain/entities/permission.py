"""Permission entity - catalog entry granting actions on a module."""

from dataclasses import dataclass, field
from typing import Any

from accessgate.domain.exceptions import ValidationError
from accessgate.domain.validation import (
    parse_actions,
    parse_module,
    parse_resource,
    require_text,
)
from accessgate.domain.value_objects import PermissionAction, ResourceQualifier, SystemModule


@dataclass
class Permission:
    """Permission - module + actions, optionally narrowed to a resource.

    ``conditions`` is an opaque marker for future policy expressions. It is
    stored and returned but never evaluated.
    """

    id: str
    name: str
    module: SystemModule
    actions: frozenset[PermissionAction]
    description: str = ""
    resource: ResourceQualifier | None = None
    conditions: dict[str, Any] | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        require_text(self.id, "Permission id")
        require_text(self.name, "Permission name")
        if not isinstance(self.description, str):
            raise ValidationError("Permission description must be a string")
        self.module = parse_module(self.module)
        self.actions = parse_actions(self.actions)
        self.resource = parse_resource(self.resource)

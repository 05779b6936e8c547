"""Domain value objects."""

from accessgate.domain.value_objects.decision_reason import DecisionReason
from accessgate.domain.value_objects.permission_action import PermissionAction
from accessgate.domain.value_objects.resource_qualifier import ResourceQualifier
from accessgate.domain.value_objects.system_module import SystemModule

__all__ = [
    "DecisionReason",
    "PermissionAction",
    "ResourceQualifier",
    "SystemModule",
]

"""Reason codes attached to every authorization decision."""

from enum import StrEnum


class DecisionReason(StrEnum):
    """Why a request was granted or denied. For audit logs, not end users."""

    SUPERUSER_BYPASS = "superuser-bypass"
    CUSTOM_GRANT = "custom-grant"
    RESOURCE_GRANT = "resource-grant"
    EXPLICIT_RESTRICTION = "explicit-restriction"
    ROLE_GRANT = "role-grant"
    ROLE_DENIED = "role-denied"
    ACTOR_NOT_FOUND = "actor-not-found"
    STORE_ERROR = "store-error"

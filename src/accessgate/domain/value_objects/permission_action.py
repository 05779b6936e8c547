"""Permission actions for RBAC."""

from enum import StrEnum


class PermissionAction(StrEnum):
    """Actions that can be granted within a module.

    Each value is a distinct literal; MANAGE does not imply the others.
    """

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    APPROVE = "approve"
    ASSIGN = "assign"
    EXPORT = "export"
    IMPORT = "import"
    MANAGE = "manage"

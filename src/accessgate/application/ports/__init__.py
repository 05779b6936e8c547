"""Application ports - interfaces for external adapters."""

from accessgate.application.ports.permission_checker import PermissionChecker
from accessgate.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]

"""In-memory persistence backend."""

from accessgate.infrastructure.persistence.memory.store import InMemoryPolicyStore, PolicyTables
from accessgate.infrastructure.persistence.memory.unit_of_work import (
    InMemoryUnitOfWork,
    create_memory_uow_factory,
)

__all__ = [
    "InMemoryPolicyStore",
    "InMemoryUnitOfWork",
    "PolicyTables",
    "create_memory_uow_factory",
]

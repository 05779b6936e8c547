"""Fixtures for API tests."""

import asyncio
import logging

import pytest
from falcon.testing import TestClient

from accessgate.application.use_cases.catalog.initialize_default_catalog import (
    InitializeDefaultCatalogUseCase,
)
from accessgate.config import Settings
from accessgate.domain.entities import Actor
from accessgate.infrastructure.permission.permission_checker import AccessGatePermissionChecker
from accessgate.infrastructure.persistence.memory import (
    InMemoryPolicyStore,
    create_memory_uow_factory,
)
from accessgate.main import create_accessgate_app


@pytest.fixture(autouse=True)
def restore_root_logger():
    """create_accessgate_app reconfigures logging; undo it after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, store_backend="memory", cors_origins="http://portal.local")


@pytest.fixture
def api_store() -> InMemoryPolicyStore:
    """Store seeded with the default catalog and one actor per default role."""
    store = InMemoryPolicyStore()
    factory = create_memory_uow_factory(store)
    seed = InitializeDefaultCatalogUseCase(factory, AccessGatePermissionChecker(factory))
    asyncio.run(seed.execute("bootstrap"))
    for actor_id, role_name in [
        ("u-root", "super_admin"),
        ("u-admin", "admin"),
        ("u-manager", "manager"),
        ("u-emp", "employee"),
        ("u-user", "user"),
    ]:
        store.add_actor(Actor(id=actor_id, role_name=role_name))
    return store


@pytest.fixture
def app(settings, api_store):
    """Falcon ASGI app wired by the composition root over the memory store."""
    return create_accessgate_app(settings, api_store)


@pytest.fixture
def client(app):
    """Falcon ASGI test client."""
    return TestClient(app)

"""Settings and logging setup tests."""

import logging

import pytest
from pydantic import ValidationError as SettingsError

from accessgate.config import Settings
from accessgate.logging_config import configure_logging


def test_settings_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ACCESSGATE_STORE_BACKEND", "memory")
    monkeypatch.setenv("ACCESSGATE_STORE_TIMEOUT_SECONDS", "0.5")
    monkeypatch.setenv("ACCESSGATE_SUPERUSER_ROLE", "root")
    settings = Settings(_env_file=None)
    assert settings.store_backend == "memory"
    assert settings.store_timeout_seconds == 0.5
    assert settings.superuser_role == "root"


def test_settings_defaults() -> None:
    settings = Settings(_env_file=None)
    assert settings.superuser_role == "super_admin"
    assert settings.store_timeout_seconds == 5.0
    assert settings.keycloak_client_secret == ""


def test_settings_reject_bad_values() -> None:
    with pytest.raises(SettingsError):
        Settings(_env_file=None, store_timeout_seconds=0)
    with pytest.raises(SettingsError):
        Settings(_env_file=None, store_backend="redis")


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_configure_logging_levels(restore_root_logger) -> None:
    configure_logging("warning")
    assert logging.getLogger().level == logging.WARNING
    configure_logging("INFO", debug=True)
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("psycopg.pool").level == logging.WARNING

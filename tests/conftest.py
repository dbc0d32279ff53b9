# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - config          → AppConfig with defaults (ignores any .env)
# - store_path      → tmp_path based store path, no suffix
# - default_record  → default record template
# - db              → fresh, unloaded Database
# - events          → records every event emitted by db
# ==============================================

import pytest

from fastdb.config import AppConfig, reset_config
from fastdb.database import Database
from fastdb.events import Event


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def config() -> AppConfig:
    return AppConfig()


@pytest.fixture
def store_path(tmp_path) -> str:
    return str(tmp_path / "users")


@pytest.fixture
def default_record() -> dict:
    return {"Name": "", "ID": 0, "Active": True}


@pytest.fixture
def db(store_path, default_record, config) -> Database:
    return Database(store_path, default_record, config)


@pytest.fixture
def events(db):
    """Collect (event, payload) tuples in emission order."""
    seen = []
    for event in Event:
        db.on(event, lambda payload, event=event: seen.append((event, payload)))
    return seen


@pytest.fixture
def sample_records() -> list:
    return [
        {"Name": "John", "ID": 1},
        {"Name": "Jane", "ID": 2},
        {"Name": "John", "ID": 3, "Active": False},
        {"Name": "Mark", "ID": 4},
        {"Name": "Anna", "ID": 5},
    ]

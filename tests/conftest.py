import pytest
from fastapi.testclient import TestClient

from notes_api.config.settings import Settings
from notes_api.main import create_app
from tests.fixtures.aws import mocked_aws  # noqa: F401
from tests.fixtures.db_client import db_path, kv_db_path, kv_store, row_store  # noqa: F401


def make_settings(tmp_path, **overrides) -> Settings:
    values = {
        "storage_backend": "remote",
        "row_store": "sqlite",
        "blob_store": "filesystem",
        "db_path": str(tmp_path / "notes.db"),
        "kv_db_path": str(tmp_path / "notes_kv.db"),
        "storage_dir": str(tmp_path / "storage"),
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture
def local_settings(tmp_path) -> Settings:
    return make_settings(tmp_path, storage_backend="local")


@pytest.fixture
def client(settings):
    """API client on the remote backend (SQLite rows, blobs on disk)."""
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def local_client(local_settings):
    """API client on the key-value store backend."""
    with TestClient(create_app(local_settings)) as client:
        yield client

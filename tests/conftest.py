import pytest
from fastapi.testclient import TestClient

from app.core.db import get_store
from app.db.store import JsonDocumentStore
from app.main import app


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "db.json"


@pytest.fixture
def store(db_path):
    return JsonDocumentStore(db_path)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

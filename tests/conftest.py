import pytest
from fastapi.testclient import TestClient

import fastapi_app
from fastapi_app import app
from score_store import ScoreStore


@pytest.fixture(scope="module")
def client():
    """Shared FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def score_log(tmp_path, monkeypatch):
    """Point the API at a temporary score log."""
    store = ScoreStore(tmp_path / "scores.txt")
    monkeypatch.setattr(fastapi_app, "store", store)
    return store

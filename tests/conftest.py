"""Shared fixtures: in-memory database, stores, fake generator and API client."""

import os
import tempfile

# Configure the app before any knowyourself module reads settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["APP_ENV"] = "testing"
os.environ["LLM_PROVIDER"] = "google"
os.environ["GOOGLE_API_KEY"] = "test-key"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LOG_DIR"] = os.path.join(tempfile.gettempdir(), "knowyourself-test-logs")

import pytest
from fastapi.testclient import TestClient

from knowyourself.api.dependencies import get_analysis_generator
from knowyourself.core.rate_limiter import reset_rate_limiter
from knowyourself.database import get_database, init_tables, reset_database
from knowyourself.storage import AnalysisStore, FinalLearningStore, ReflectionStore, UserStore


class FakeGenerator:
    """Stands in for AnalysisGenerator; records every call."""

    def __init__(self, discoveries=None, error=None):
        self.discoveries = discoveries if discoveries is not None else [
            "**Resilience:** You recover from setbacks by reframing them.",
            "**Self-Awareness:** You notice how your beliefs shift over time.",
        ]
        self.error = error
        self.calls = []

    def generate(self, response_texts):
        self.calls.append(list(response_texts))
        if self.error is not None:
            raise self.error
        return list(self.discoveries)


@pytest.fixture(autouse=True)
def _fresh_rate_limiter():
    reset_rate_limiter()
    yield
    reset_rate_limiter()


@pytest.fixture
def db():
    reset_database()
    database = get_database()
    init_tables(database)
    yield database
    reset_database()


@pytest.fixture
def user_store(db):
    return UserStore(db)


@pytest.fixture
def reflection_store(db):
    return ReflectionStore(db)


@pytest.fixture
def analysis_store(db):
    return AnalysisStore(db)


@pytest.fixture
def final_learning_store(db):
    return FinalLearningStore(db)


@pytest.fixture
def user(user_store):
    return user_store.create("river", "correct-horse-battery")


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def client(db, fake_generator):
    from knowyourself.api.main import app

    app.dependency_overrides[get_analysis_generator] = lambda: fake_generator
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c
    app.dependency_overrides.clear()


def register(client, username="river", password="correct-horse-battery", **profile):
    response = client.post(
        "/api/register",
        json={"username": username, "password": password, **profile},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_headers(client):
    token = register(client)["accessToken"]
    return {"Authorization": f"Bearer {token}"}

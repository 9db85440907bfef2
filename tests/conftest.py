import os

# Must be set before skilltrack.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["IDENTITY_SHARED_SECRET"] = ""
os.environ["SESSION_SECRET"] = "test-secret"
os.environ["APP_ENV"] = "development"
os.environ["OPENAI_API_KEY"] = "test-key"

import pytest
from fastapi.testclient import TestClient

from skilltrack import models  # noqa: F401
from skilltrack.api.deps import get_ai_client
from skilltrack.database import Base, SessionLocal, engine
from skilltrack.main import app
from skilltrack.storage import Storage


class FakeAIClient:
    """Stands in for AIClient: returns scripted replies, or raises `error`."""

    model = "fake-model"

    def __init__(self):
        self.replies = []
        self.error = None
        self.calls = []

    def chat_single(self, prompt, system="", **kwargs):
        self.calls.append({"prompt": prompt, "system": system, **kwargs})
        if self.error is not None:
            raise self.error
        return self.replies.pop(0) if self.replies else "{}"

    def close(self):
        pass


@pytest.fixture
def db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def storage(db):
    return Storage(db)


@pytest.fixture
def fake_ai():
    return FakeAIClient()


@pytest.fixture
def client(db, fake_ai):
    app.dependency_overrides[get_ai_client] = lambda: fake_ai
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def login(client):
    def _login(sub="user-1", **claims):
        resp = client.post("/api/login", json={"sub": sub, "email": f"{sub}@example.com", **claims})
        assert resp.status_code == 200, resp.text
        return resp.json()
    return _login

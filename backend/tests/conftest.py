# Set test environment before any application or db imports.
import os

os.environ["TESTING"] = "true"
os.environ["TESTING_DATABASE_URL"] = "sqlite:///:memory:"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["API_KEY"] = "test-api-key"

import pytest
from fastapi.testclient import TestClient

from db import SessionLocal, get_db
from main import app
from models import Base
from models.charging_station import ChargingStation  # noqa: F401 - register with Base
from models.charging_station_type import ChargingStationType  # noqa: F401
from models.connector import Connector  # noqa: F401

API = "/api/v1"
API_KEY = "test-api-key"
JWT_SECRET = "test-secret"


def _get_engine():
    """Engine used by the app (in-memory when TESTING=true)."""
    return SessionLocal.kw["bind"]


@pytest.fixture(scope="session")
def engine():
    """One in-memory engine per test run."""
    return _get_engine()


@pytest.fixture
def db_session(engine):
    """Function-scoped session on a freshly created schema, so committed rows never leak between tests."""
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture(autouse=True)
def secrets_env(monkeypatch):
    """Known JWT secret and API key for every test; tests may delete them."""
    monkeypatch.setenv("JWT_SECRET", JWT_SECRET)
    monkeypatch.setenv("API_KEY", API_KEY)


def _override_get_db(session):
    """Return a generator that yields the given session (for dependency override)."""
    def override():
        yield session
    return override


@pytest.fixture
def token_cache():
    """The app's token cache, emptied before and after each test."""
    cache = app.state.token_cache
    cache.clear()
    yield cache
    cache.clear()


@pytest.fixture
def client(db_session, token_cache):
    """API test client; overrides get_db to use the test db_session, cleared on teardown."""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Authorization header carrying a token issued through /generatetoken."""
    r = client.post(f"{API}/generatetoken", headers={"x-api-key": API_KEY})
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['token']}"}

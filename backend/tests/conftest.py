"""Pytest fixtures — in-memory SQLite database for fast, isolated tests."""
import os

# Keep app start-up from creating a database file in the working directory
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from request_hub.context import SessionContext  # noqa: E402
from request_hub.database import Base, get_db  # noqa: E402
from request_hub.main import app  # noqa: E402
from request_hub.services import auth_service  # noqa: E402

# Import all models so they register with Base.metadata
from request_hub.models.user import User                    # noqa: F401,E402
from request_hub.models.event import Event                  # noqa: F401,E402
from request_hub.models.song_request import SongRequest     # noqa: F401,E402
from request_hub.models.revoked_token import RevokedToken   # noqa: F401,E402

PASSWORD = "s3cret-pass"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh in-memory engine for each test (one shared connection)."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session bound to the test engine."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(db_engine):
    """FastAPI TestClient with the database dependency overridden."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def organizer_ctx(db):
    """Service-level context for a registered organizer."""
    identity = auth_service.register(db, "dj.one@example.com", PASSWORD, PASSWORD)
    return SessionContext(db=db, identity=identity)


@pytest.fixture(scope="function")
def anon_ctx(db):
    """Service-level context with no identity."""
    return SessionContext(db=db)


# ---------------------------------------------------------------------------
# Helpers: drive the API and return response JSON
# ---------------------------------------------------------------------------
def register_user(client: TestClient, email: str = "dj@example.com", password: str = PASSWORD) -> dict:
    """Helper — POST /api/auth/register and return response JSON."""
    resp = client.post("/api/auth/register", json={
        "email": email,
        "password": password,
        "confirm_password": password,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def login_headers(client: TestClient, email: str = "dj@example.com", password: str = PASSWORD) -> dict:
    """Helper — log in and return an Authorization header dict."""
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def organizer(client: TestClient, email: str = "dj@example.com") -> tuple[dict, dict]:
    """Helper — register and log in; return (identity, headers)."""
    identity = register_user(client, email=email)
    return identity, login_headers(client, email=email)


def create_test_event(client: TestClient, headers: dict, name: str = "Friday Night",
                      days_ahead: int = 7, description: str = "") -> dict:
    """Helper — POST /api/events and return response JSON."""
    when = datetime.now(timezone.utc) + timedelta(days=days_ahead)
    resp = client.post("/api/events/", headers=headers, json={
        "name": name,
        "date": when.isoformat(),
        "description": description,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def submit_test_request(client: TestClient, event_id: str, song: str = "Song",
                        artist: str = "Artist", tip=None) -> dict:
    """Helper — POST /api/events/{id}/requests and return response JSON."""
    payload = {"song_name": song, "artist": artist}
    if tip is not None:
        payload["tip_amount"] = tip
    resp = client.post(f"/api/events/{event_id}/requests", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()

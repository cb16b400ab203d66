"""
Pytest fixtures for backend tests.

Each test gets its own in-memory SQLite database and a weather client
backed by httpx.MockTransport, so nothing leaves the process.
"""

import os
import tempfile

# The app builds its engine at import time; point it at a throwaway SQLite
# file so startup (schema bootstrap) never needs a PostgreSQL server.
_bootstrap_dir = tempfile.mkdtemp(prefix="brunch-blog-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_bootstrap_dir, 'bootstrap.db')}"

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from app.db.models import Base
from app.db.session import get_db, get_session_factory
from app.main import app
from app.posts.service import PostService
from app.weather.routes import get_weather_client
from tests.helpers import make_engine, make_weather_client, weather_payload


@pytest.fixture
def test_engine():
    """Create a test database engine with in-memory SQLite."""
    engine = make_engine()
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def post_service(db_session):
    return PostService(db_session)


@pytest.fixture
def weather_calls():
    """Requests received by the fake weather API."""
    return []


@pytest.fixture
def weather_handler(weather_calls):
    """Mutable responder for the fake weather API; tests swap ``respond``."""

    class Handler:
        def __init__(self):
            self.respond = lambda request: httpx.Response(200, json=weather_payload())

        def __call__(self, request):
            weather_calls.append(request)
            return self.respond(request)

    return Handler()


@pytest.fixture
def client(session_factory, weather_handler):
    """Create a test client with an isolated database and fake weather API."""

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_weather_client] = lambda: make_weather_client(weather_handler)

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def client_with_posts(client):
    """Test client with three posts created through the API (oldest first)."""
    ids = []
    for i in range(1, 4):
        response = client.post("/api/posts", json={
            "title": f"Post {i}",
            "content": f"# Post {i}\n\nBody of post {i}.",
            "excerpt": f"Excerpt {i}",
        })
        assert response.status_code == 201
        ids.append(response.json()["post"]["id"])
    return client, ids

"""Pytest configuration and fixtures."""

import json
import os
from types import SimpleNamespace

# Configure settings BEFORE importing application modules
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["REDIS_URL"] = ""
os.environ["OPENAI_API_KEY"] = ""
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["PLATFORM_PROFILE"] = "strict"
os.environ["FREE_TIER_LINK_LIMIT"] = "50"

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from clipkeeper.database import Base, get_db
from clipkeeper.dependencies import get_ai_service, get_metadata_service
from clipkeeper.main import app
from clipkeeper.models.user import User
from clipkeeper.redis_client import RedisClient, get_redis
from clipkeeper.repository import LinkRepository
from clipkeeper.services.ai_service import AIService
from clipkeeper.services.auth_service import AuthService
from clipkeeper.services.metadata_service import MetadataService


# =============================================================================
# Fakes
# =============================================================================


class FakeCompletions:
    """Stands in for ``client.chat.completions`` of the OpenAI SDK."""

    def __init__(self, content=None, error: Exception | None = None):
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error

        content = self.content
        if isinstance(content, (dict, list)):
            content = json.dumps(content)

        message = SimpleNamespace(content=content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class FakeOpenAI:
    def __init__(self, content=None, error: Exception | None = None):
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self) -> list[dict]:
        return self.completions.calls


def oembed_transport(responses: dict[str, dict] | None = None) -> httpx.MockTransport:
    """
    Transport answering oEmbed requests by endpoint host.

    Hosts missing from ``responses`` fail with a connection error.
    """
    responses = responses or {}

    def handler(request: httpx.Request) -> httpx.Response:
        body = responses.get(request.url.host)
        if body is None:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json=body)

    return httpx.MockTransport(handler)


# =============================================================================
# Database
# =============================================================================


@pytest.fixture
def engine():
    """Create an in-memory database shared by every session of a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(
        bind=engine, autocommit=False, autoflush=False, expire_on_commit=False
    )


@pytest.fixture
def db_session(session_factory):
    """Create a test database session."""
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def repository(db_session):
    return LinkRepository(db_session)


@pytest.fixture
def make_user(session_factory):
    """Factory committing a user in its own session and returning it."""
    counter = {"n": 0}

    def _make_user(
        is_premium: bool = False, password: str | None = None, username: str | None = None
    ) -> User:
        counter["n"] += 1
        n = counter["n"]
        session = session_factory()
        try:
            user = LinkRepository(session).create_user(
                username=username or f"user{n}",
                email=f"{username or f'user{n}'}@example.com",
                password_hash=AuthService.hash_password(password) if password else "unused",
                is_premium=is_premium,
            )
            session.commit()
            return user
        finally:
            session.close()

    return _make_user


# =============================================================================
# Services
# =============================================================================


@pytest.fixture
def fake_openai():
    return FakeOpenAI(
        content={
            "title": "Five minute pasta",
            "category": "Cooking",
            "tags": ["pasta", "easy", "dinner"],
            "duration": "0:45",
        }
    )


@pytest.fixture
def ai_service(fake_openai):
    return AIService(client=fake_openai)


@pytest.fixture
def failing_metadata_service():
    return MetadataService(transport=oembed_transport())


# =============================================================================
# API client
# =============================================================================


@pytest.fixture
def client(session_factory, ai_service, failing_metadata_service):
    """Create a test client with the test database and faked external services."""

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai_service] = lambda: ai_service
    app.dependency_overrides[get_metadata_service] = lambda: failing_metadata_service
    app.dependency_overrides[get_redis] = lambda: RedisClient(url="")

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Build bearer headers for a user."""

    def _auth_headers(user: User) -> dict[str, str]:
        token = AuthService.create_tokens_for_user(user)["access_token"]
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers

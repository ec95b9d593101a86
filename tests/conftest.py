"""Pytest configuration and fixtures."""

import os

# Settings are read once on import, so the test environment goes first
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ.setdefault("APP_URL", "http://test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from src.api.dependencies.database import get_db
from src.api.dependencies.services import get_google_oauth_client
from src.api.main import app
from src.shared.adapters.file_store import LocalFileStore, get_file_store
from src.shared.adapters.google_oauth import GoogleIdentity, OAuthVerificationError
from src.shared.models import Base

STORAGE_BASE_URL = "http://test/storage"


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


class FakeGoogleOAuth:
    """Stands in for GoogleOAuthAdapter; knows a fixed set of tokens."""

    def __init__(self):
        self.identities: dict[str, GoogleIdentity] = {}

    def add(self, token: str, google_id: str, email: str, name: str = "Google User") -> None:
        self.identities[token] = GoogleIdentity(id=google_id, email=email, name=name)

    async def fetch_identity(self, access_token: str) -> GoogleIdentity:
        try:
            return self.identities[access_token]
        except KeyError:
            raise OAuthVerificationError("Token rejected by Google") from None


@pytest.fixture
async def engine():
    """In-memory database shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    """Session for service and repository tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def file_store(tmp_path):
    return LocalFileStore(root=str(tmp_path / "storage"), base_url=STORAGE_BASE_URL)


@pytest.fixture
def google_oauth():
    return FakeGoogleOAuth()


@pytest.fixture
async def client(session_factory, file_store, google_oauth):
    """Create an API client with database, storage and Google overrides."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_store] = lambda: file_store
    app.dependency_overrides[get_google_oauth_client] = lambda: google_oauth

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
async def auth_headers(client):
    """Register and log in a user, return auth headers with user info."""
    response = await client.post(
        "/v1/auth/register",
        json={
            "name": "Test User",
            "email": "test@example.com",
            "password": "testpass123",
            "password_confirmation": "testpass123",
        },
    )
    assert response.status_code == 201

    response = await client.post(
        "/v1/auth/login",
        json={"email": "test@example.com", "password": "testpass123"},
    )
    assert response.status_code == 200
    data = response.json()

    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"},
        user_id=data["data"]["id"],
        email=data["data"]["email"],
    )

"""Pytest configuration and fixtures."""

import uuid
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from flithub.api.deps import get_identity_service
from flithub.database import get_db
from flithub.main import app
from flithub.models.provider import Provider
from flithub.models.resource import Resource
from flithub.models.user_role import UserRole
from flithub.schemas.enums import AppRole
from flithub.services.auth_service import AuthUser
from flithub.services.exceptions import UnauthorizedError

# In-memory SQLite shared across connections of one engine
TEST_DATABASE_URL = "sqlite+aiosqlite://"

ADMIN_USER_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
SUBMITTER_USER_ID = uuid.UUID("22222222-2222-2222-2222-222222222222")

ADMIN_TOKEN = "admin-token"
SUBMITTER_TOKEN = "submitter-token"

# ============================================================================
# JSONB → JSON compatibility for SQLite
# SQLite doesn't have JSONB, so we need to render it as JSON (which is TEXT)
# ============================================================================
from sqlalchemy.dialects.sqlite.base import SQLiteTypeCompiler


def _visit_JSONB(self, type_, **kw):
    return "JSON"


SQLiteTypeCompiler.visit_JSONB = _visit_JSONB


class FakeIdentityService:
    """Stands in for the identity provider: known tokens map to users."""

    def __init__(self, users: dict[str, AuthUser]):
        self.users = users
        self.calls: list[str] = []

    async def get_user(self, token: str) -> AuthUser:
        self.calls.append(token)
        user = self.users.get(token)
        if user is None:
            raise UnauthorizedError("Invalid authentication")
        return user


@pytest.fixture
async def test_engine():
    """Create a fresh in-memory database per test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a database session for each test."""
    session_factory = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        yield session


@pytest.fixture
def identity_service() -> FakeIdentityService:
    return FakeIdentityService(
        {
            ADMIN_TOKEN: AuthUser(id=ADMIN_USER_ID, email="admin@example.ie"),
            SUBMITTER_TOKEN: AuthUser(id=SUBMITTER_USER_ID, email="teacher@example.ie"),
        }
    )


@pytest.fixture
async def role_grants(db_session: AsyncSession) -> None:
    """Admin holds the admin role; submitter only holds submitter."""
    db_session.add(UserRole(user_id=ADMIN_USER_ID, role=AppRole.ADMIN))
    db_session.add(UserRole(user_id=ADMIN_USER_ID, role=AppRole.USER))
    db_session.add(UserRole(user_id=SUBMITTER_USER_ID, role=AppRole.SUBMITTER))
    await db_session.commit()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def submitter_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {SUBMITTER_TOKEN}"}


@pytest.fixture
async def client(
    db_session: AsyncSession,
    identity_service: FakeIdentityService,
    role_grants: None,
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing."""

    async def override_get_db():
        yield db_session

    async def override_get_identity_service():
        yield identity_service

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_service] = override_get_identity_service

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def make_provider(db_session: AsyncSession):
    """Factory fixture that stores a provider and returns it."""

    async def _make(name: str, **kwargs) -> Provider:
        provider = Provider(name=name, **kwargs)
        db_session.add(provider)
        await db_session.commit()
        await db_session.refresh(provider)
        return provider

    return _make


@pytest.fixture
async def make_resource(db_session: AsyncSession):
    """Factory fixture that stores a resource and returns it."""

    async def _make(title: str, **kwargs) -> Resource:
        values = {
            "description": "Existing resource",
            "resource_type": "guide",
            "topics": ["budgeting"],
            "levels": ["junior_cycle"],
        }
        values.update(kwargs)
        resource = Resource(title=title, **values)
        db_session.add(resource)
        await db_session.commit()
        await db_session.refresh(resource)
        return resource

    return _make

"""Pytest configuration and fixtures."""

import os
import sys
from collections.abc import AsyncGenerator, Awaitable, Callable
from pathlib import Path
from typing import Any
from uuid import UUID, uuid4

# Disable rate limiting in tests
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.pool import StaticPool

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.exceptions import GitHubProfileNotFoundError
from domain.entities.profile import RepoSummary
from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import TokenUser
from infrastructure.database.models import Base


# Compile JSONB as JSON for SQLite (used in tests)
@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(type_: Any, compiler: Any, **kw: Any) -> str:
    return "JSON"


# Test database URL (SQLite in memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

TEST_SECRET_KEY = "test-secret-key"


class FakeRepositoryLookup:
    """Repository lookup that answers from memory instead of GitHub."""

    def __init__(self) -> None:
        self.repos: dict[str, list[RepoSummary]] = {
            "octocat": [
                RepoSummary(
                    name="hello-world",
                    full_name="octocat/hello-world",
                    html_url="https://github.com/octocat/hello-world",
                    description="My first repository",
                    language="Python",
                    stargazers_count=3,
                    watchers_count=3,
                    forks_count=1,
                )
            ]
        }

    async def list_repos(self, username: str) -> list[RepoSummary]:
        if username not in self.repos:
            raise GitHubProfileNotFoundError(username)
        return self.repos[username]


@pytest.fixture(scope="session")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create test database engine (one shared in-memory connection)."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    await engine.dispose()


@pytest.fixture(scope="session")
async def setup_database(engine: AsyncEngine) -> AsyncGenerator[None, None]:
    """Create all tables once per session."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture(scope="session")
async def session_factory(
    engine: AsyncEngine, setup_database: None
) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Create session factory."""
    factory = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    yield factory


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def test_user() -> TokenUser:
    """A token user with a random ID (not stored in the database)."""
    return TokenUser(id=uuid4())


@pytest.fixture
def auth_provider() -> JWTAuthProvider:
    """Create auth provider for testing."""
    return JWTAuthProvider(
        secret_key=TEST_SECRET_KEY,
        algorithm="HS256",
        expire_seconds=3600,
    )


@pytest.fixture
def auth_token(auth_provider: JWTAuthProvider, test_user: TokenUser) -> str:
    """Create auth token for test user."""
    return str(auth_provider.create_token(test_user))


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def repo_lookup() -> FakeRepositoryLookup:
    """In-memory GitHub stand-in."""
    return FakeRepositoryLookup()


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create async test client on the module-level app (no overrides)."""
    from main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def api_client(
    session_factory: async_sessionmaker[AsyncSession],
    auth_provider: JWTAuthProvider,
    repo_lookup: FakeRepositoryLookup,
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test client wired to the test database.

    This client:
    - Uses an in-memory SQLite database shared by the whole session
    - Signs and checks tokens with the test auth provider
    - Hashes passwords with a low bcrypt cost
    - Answers GitHub lookups from memory
    """
    from api.dependencies.auth import get_auth_provider
    from api.dependencies.services import (
        get_post_service,
        get_profile_service,
        get_user_service,
    )
    from domain.services.post_service import PostService
    from domain.services.profile_service import ProfileService
    from domain.services.user_service import UserService
    from infrastructure.auth.password import BcryptPasswordHasher
    from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
    from main import create_app

    app = create_app()

    # Create a UoW factory that uses test session
    def test_uow_factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    user_service = UserService(
        test_uow_factory,
        auth_provider=auth_provider,
        password_hasher=BcryptPasswordHasher(rounds=4),
    )
    profile_service = ProfileService(test_uow_factory, repo_lookup=repo_lookup)
    post_service = PostService(test_uow_factory)

    app.dependency_overrides[get_auth_provider] = lambda: auth_provider
    app.dependency_overrides[get_user_service] = lambda: user_service
    app.dependency_overrides[get_profile_service] = lambda: profile_service
    app.dependency_overrides[get_post_service] = lambda: post_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()


RegisteredUser = dict[str, Any]


@pytest.fixture
def register(
    api_client: AsyncClient,
) -> Callable[..., Awaitable[RegisteredUser]]:
    """
    Register a fresh account through the API.

    Emails are made unique per call because the database lives for the
    whole session. Returns the token, auth headers, id and email.
    """

    async def _register(name: str = "Ann", password: str = "secret1") -> RegisteredUser:
        email = f"{name.lower()}-{uuid4().hex[:8]}@example.com"
        response = await api_client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        token = response.json()["token"]
        headers = {"x-auth-token": token}

        me = await api_client.get("/api/auth", headers=headers)
        assert me.status_code == 200, me.text

        return {
            "token": token,
            "headers": headers,
            "id": UUID(me.json()["id"]),
            "email": email,
            "name": name,
        }

    return _register

# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read when the app is first imported
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["LOG_TO_FILE"] = "false"

from collections.abc import AsyncGenerator, Awaitable, Callable  # noqa: E402
from dataclasses import dataclass  # noqa: E402

from httpx import ASGITransport, AsyncClient  # noqa: E402
from pytest import fixture  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from blog_api.db import build_engine, build_session_maker, get_session, init_db, transaction  # noqa: E402
from blog_api.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
DEFAULT_PASSWORD = "password123"


@dataclass(frozen=True)
class RegisteredUser:
    """A user created through the signup endpoint."""

    id: str
    email: str
    token: str

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


type Register = Callable[..., Awaitable[RegisteredUser]]


@fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database per test; StaticPool keeps the one connection alive."""
    test_engine = build_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await init_db(test_engine)
    yield test_engine
    await test_engine.dispose()


@fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_maker(engine)


@fixture
async def session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession]:
    async with transaction(session_maker) as db_session:
        yield db_session


@fixture
async def client(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client bound to the test database."""

    async def override_get_session() -> AsyncGenerator[AsyncSession]:
        async with transaction(session_maker) as db_session:
            yield db_session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@fixture
def register(client: AsyncClient) -> Register:
    """Factory that signs up a user and returns its id and token."""

    async def _register(
        email: str = "ada@example.com",
        first_name: str = "Ada",
        last_name: str = "Lovelace",
        password: str = DEFAULT_PASSWORD,
    ) -> RegisteredUser:
        response = await client.post(
            "/api/auth/signup",
            json={
                "firstName": first_name,
                "lastName": last_name,
                "email": email,
                "password": password,
            },
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return RegisteredUser(id=body["user"]["id"], email=email, token=body["accessToken"])

    return _register


@fixture
async def author(register: Register) -> RegisteredUser:
    return await register()


@fixture
async def reader(register: Register) -> RegisteredUser:
    return await register(email="grace@example.com", first_name="Grace", last_name="Hopper")

"""
Pytest fixtures - in-memory DB, HTTP client, users and auth headers.
Environment is set before any app import so cached settings pick it up.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-the-catalog-suite")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.core.security import create_access_token, hash_password  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.db.models import Product, User  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402

# One shared in-memory SQLite connection per test (StaticPool keeps it alive)
TEST_DATABASE_URL = "sqlite+aiosqlite://"

ADMIN_PASSWORD = "Admin123"
USER_PASSWORD = "User1234"


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    async_session = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )
    async with async_session() as s:
        yield s


@pytest_asyncio.fixture
async def client(session: AsyncSession):
    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


async def _make_user(session: AsyncSession, name: str, email: str, password: str, role: str) -> User:
    user = User(name=name, email=email, hashed_password=hash_password(password), role=role)
    session.add(user)
    await session.flush()
    await session.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(session: AsyncSession) -> User:
    return await _make_user(session, "Admin", "admin@example.com", ADMIN_PASSWORD, "admin")


@pytest_asyncio.fixture
async def regular_user(session: AsyncSession) -> User:
    return await _make_user(session, "Regular User", "user@example.com", USER_PASSWORD, "user")


@pytest.fixture
def admin_headers(admin_user: User) -> dict:
    token = create_access_token(admin_user.id, admin_user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers(regular_user: User) -> dict:
    token = create_access_token(regular_user.id, regular_user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def product(session: AsyncSession) -> Product:
    product = Product(name="Widget", price=9.99, image="https://x.com/a.png")
    session.add(product)
    await session.flush()
    await session.refresh(product)
    return product

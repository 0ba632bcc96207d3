import os
import sys
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

ENV_TEST_PATH = Path(__file__).parents[1] / ".env.test"


def _load_env_file(path: Path) -> None:
    if not path.exists():
        return
    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key, value)


_load_env_file(ENV_TEST_PATH)
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET", "test-secret-key-that-is-long-enough-for-hs256")

from expense_tracker.db.session import get_db  # noqa: E402
from expense_tracker.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_engine():
    """One in-memory database per test; StaticPool keeps it on a single connection."""
    from expense_tracker.models.base import Base
    import expense_tracker.models  # noqa: F401  (register tables)

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


@pytest.fixture
async def db_session(test_engine):
    """Provide test database session."""
    session_factory = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def token_service():
    return app.state.token_service


async def _create_user(db_session: AsyncSession, name: str, email: str, password: str):
    from expense_tracker.core.security import hash_password
    from expense_tracker.models.user import User
    from expense_tracker.repositories.user import UserRepository

    repo = UserRepository(db_session)
    return await repo.create(
        User(name=name, email=email, password_hash=hash_password(password))
    )


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a test user for authentication tests."""
    return await _create_user(db_session, "Test User", "testuser@example.com", "password123")


@pytest.fixture
async def another_user(db_session: AsyncSession):
    """Second user for ownership tests."""
    return await _create_user(db_session, "Another User", "another@example.com", "password456")


@pytest.fixture
def auth_headers(test_user, token_service):
    """Provide authentication headers with valid JWT token."""
    token = token_service.issue(test_user.id, test_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_headers(another_user, token_service):
    token = token_service.issue(another_user.id, another_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()

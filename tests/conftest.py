"""
Pytest fixtures для тестов.

Предоставляет:
- test_db: изолированная SQLite in-memory БД для каждого теста
- admin / member / outsider: пользователи в test_db
- test_client: HTTP клиент для тестирования API endpoints
- api_users: пользователи для API тестов (создаются отдельной сессией)
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from task_tracker.api.dependencies import get_db
from task_tracker.core.config import settings
from task_tracker.main import app
from task_tracker.models import Base, Project, User

# Test database URL (SQLite in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


async def make_user(session: AsyncSession, email: str, is_admin: bool = False, **kwargs) -> User:
    """Создать пользователя и сделать commit."""
    user = User(
        email=email,
        first_name=kwargs.pop("first_name", email.split("@")[0].capitalize()),
        last_name=kwargs.pop("last_name", "Test"),
        is_admin=is_admin,
        **kwargs,
    )
    session.add(user)
    await session.commit()
    return user


async def make_project(
    session: AsyncSession, name: str, owner: User, participants=(), is_active: bool = True
) -> Project:
    """Создать проект с участниками и сделать commit."""
    project = Project(
        name=name, owner=owner, participants=list(participants), is_active=is_active
    )
    session.add(project)
    await session.commit()
    return project


def auth_headers(user_id) -> dict[str, str]:
    return {"X-API-Key": settings.API_KEY, "X-User-ID": str(user_id)}


@pytest_asyncio.fixture
async def test_engine():
    """
    Создаёт async engine для тестовой БД (SQLite in-memory).

    StaticPool обеспечивает что используется одно и то же соединение,
    что критично для in-memory БД (иначе данные теряются).
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_db(session_factory):
    """
    Предоставляет async session для работы с тестовой БД.

    Каждый тест получает чистую БД.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def admin(test_db) -> User:
    return await make_user(test_db, "admin@example.com", is_admin=True)


@pytest_asyncio.fixture
async def member(test_db) -> User:
    return await make_user(test_db, "member@example.com")


@pytest_asyncio.fixture
async def outsider(test_db) -> User:
    return await make_user(test_db, "outsider@example.com")


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Предоставляет HTTP клиент для тестирования API endpoints.

    Использует тестовую БД вместо production БД.
    """

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def api_users(session_factory) -> dict[str, str]:
    """
    Пользователи для API тестов: {"admin": id, "member": id, "outsider": id}.

    Создаются в отдельной сессии, которая закрывается до начала запросов.
    """
    async with session_factory() as session:
        users = {
            "admin": await make_user(session, "admin@example.com", is_admin=True),
            "member": await make_user(session, "member@example.com"),
            "outsider": await make_user(session, "outsider@example.com"),
        }
        return {role: str(user.id) for role, user in users.items()}


# Pytest configuration
@pytest.fixture(scope="session")
def anyio_backend():
    """Используем asyncio для всех async тестов."""
    return "asyncio"

"""Конфигурация тестов."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from pr_reviewer.api.dependencies import get_session
from pr_reviewer.core.database import Base
from pr_reviewer.db.models import Team, User
from pr_reviewer.main import app


@pytest.fixture(scope="function")
async def test_db():
    """Создать тестовую БД в памяти."""

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async_session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_session_maker

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def session(test_db):
    """Создать сессию БД для теста."""
    async with test_db() as session:
        yield session


@pytest.fixture(scope="function")
async def mock_cache(monkeypatch):
    """Mock Redis кеш."""
    cache_dict = {}

    class MockRedis:
        def __init__(self):
            self.store = cache_dict

        async def get(self, key: str):
            return cache_dict.get(key)

        async def setex(self, key: str, ttl: int, value: str):
            cache_dict[key] = value

        async def delete(self, *keys):
            for key in keys:
                cache_dict.pop(key, None)

        async def aclose(self):
            pass

    mock_redis = MockRedis()

    async def fake_get_cache():
        return mock_redis

    monkeypatch.setattr("pr_reviewer.core.cache.redis_client", mock_redis)
    monkeypatch.setattr("pr_reviewer.domain.base_service.get_cache", fake_get_cache)
    return mock_redis


async def add_team(session, team_name: str, members: list[tuple[str, bool]]) -> Team:
    """Добавить команду и участников напрямую в БД."""
    team = Team(team_name=team_name)
    session.add(team)
    await session.flush()
    for user_id, is_active in members:
        session.add(
            User(user_id=user_id, username=user_id.title(), team_name=team_name, is_active=is_active)
        )
    await session.commit()
    return team


@pytest.fixture
async def sample_team(session):
    """Команда из четырех активных участников."""
    return await add_team(
        session, "backend", [("u1", True), ("u2", True), ("u3", True), ("u4", True)]
    )


@pytest.fixture
async def client(session, mock_cache):
    """HTTP клиент приложения поверх тестовой сессии."""

    async def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_team(session):
    """Фабрика команд: make_team("team1", [("user1", True), ...])."""

    async def _make(team_name: str, members: list[tuple[str, bool]]) -> Team:
        return await add_team(session, team_name, members)

    return _make

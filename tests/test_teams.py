"""Тесты для сервиса команд."""

import pytest

from pr_reviewer.core.cache import team_cache_key
from pr_reviewer.core.exceptions import NotFoundException, TeamExistsException
from pr_reviewer.domain.teams.service import TeamService


async def test_create_team(session, mock_cache):
    """Тест создания команды."""
    service = TeamService(session)
    members = [
        {"user_id": "u2", "username": "Bob", "is_active": True},
        {"user_id": "u1", "username": "Alice", "is_active": False},
    ]
    result = await service.create_team("backend", members)
    assert result["team"] == {
        "team_name": "backend",
        "members": [
            {"user_id": "u1", "username": "Alice", "is_active": False},
            {"user_id": "u2", "username": "Bob", "is_active": True},
        ],
    }


async def test_create_duplicate_team(session, mock_cache):
    """Повторное создание: TeamExists, состав команды не меняется."""
    service = TeamService(session)
    await service.create_team("backend", [{"user_id": "u1", "username": "Alice", "is_active": True}])

    with pytest.raises(TeamExistsException):
        await service.create_team(
            "backend", [{"user_id": "u9", "username": "Zed", "is_active": True}]
        )

    mock_cache.store.clear()
    result = await service.get_team("backend")
    assert [m["user_id"] for m in result["team"]["members"]] == ["u1"]


async def test_create_team_moves_existing_member(session, mock_cache):
    """Участник с известным ID переносится в новую команду с обновлением полей."""
    service = TeamService(session)
    await service.create_team(
        "backend",
        [
            {"user_id": "u1", "username": "Alice", "is_active": True},
            {"user_id": "u2", "username": "Bob", "is_active": True},
        ],
    )
    await service.get_team("backend")
    assert team_cache_key("backend") in mock_cache.store

    result = await service.create_team(
        "frontend", [{"user_id": "u2", "username": "Robert", "is_active": False}]
    )
    assert result["team"]["members"] == [
        {"user_id": "u2", "username": "Robert", "is_active": False}
    ]
    assert team_cache_key("backend") not in mock_cache.store

    backend = await service.get_team("backend")
    assert [m["user_id"] for m in backend["team"]["members"]] == ["u1"]


async def test_get_team(session, mock_cache, sample_team):
    """Тест получения команды."""
    service = TeamService(session)
    result = await service.get_team("backend")
    assert result["team"]["team_name"] == "backend"
    assert len(result["team"]["members"]) == 4


async def test_get_team_served_from_cache(session, mock_cache, sample_team):
    service = TeamService(session)
    first = await service.get_team("backend")
    assert team_cache_key("backend") in mock_cache.store

    second = await service.get_team("backend")
    assert second == first


async def test_get_nonexistent_team(session, mock_cache):
    """Тест получения несуществующей команды."""
    service = TeamService(session)
    with pytest.raises(NotFoundException):
        await service.get_team("nonexistent")


async def test_team_service_without_redis(session, monkeypatch, sample_team):
    """Без Redis сервис работает напрямую с БД."""

    async def no_cache():
        return None

    monkeypatch.setattr("pr_reviewer.domain.base_service.get_cache", no_cache)
    result = await TeamService(session).get_team("backend")
    assert len(result["team"]["members"]) == 4

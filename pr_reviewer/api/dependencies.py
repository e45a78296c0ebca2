"""Зависимости для API."""

from fastapi import Request

from pr_reviewer.core.config import settings
from pr_reviewer.core.database import get_db


async def get_session(request: Request):
    """Получить сессию БД."""
    async for session in get_db(request):
        yield session


def get_request_timeout() -> float:
    """Дедлайн одной операции, отведенный на запрос."""
    return settings.REQUEST_TIMEOUT

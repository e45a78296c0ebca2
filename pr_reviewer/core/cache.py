"""Кеширование чтения команд в Redis."""

import json
import logging
from typing import Optional

import redis.asyncio as redis
from redis.asyncio import Redis
from redis.exceptions import RedisError

from pr_reviewer.core.config import settings

logger = logging.getLogger("pr-reviewer.cache")

redis_client: Optional[Redis] = None


def team_cache_key(team_name: str) -> str:
    return f"teams:get_team:{team_name}"


async def init_cache():
    """
    Инициализация Redis.
    При недоступности Redis клиент остается None, и кеш пропускается.
    """
    global redis_client
    if redis_client is not None:
        return

    try:
        client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
        )
        await client.ping()
        redis_client = client
    except (RedisError, OSError) as e:
        logger.warning(f"Redis unavailable, team cache disabled: {e}")
        redis_client = None


async def close_cache():
    """Закрытие соединения с Redis."""
    global redis_client
    if redis_client:
        try:
            await redis_client.aclose()
        except (RedisError, OSError):
            pass
        finally:
            redis_client = None


async def get_cache() -> Optional[Redis]:
    """Получить клиент Redis (или None, если он недоступен)."""
    if redis_client is None:
        await init_cache()
    return redis_client


class CacheService:
    """
    Сервис кеша.
    Ошибка Redis отключает кеш до конца запроса и трактуется как промах.
    """

    def __init__(self, redis_client_instance: Optional[Redis], ttl: int = settings.REDIS_TTL):
        self.redis = redis_client_instance
        self.ttl = ttl
        self._is_available = self.redis is not None

    def _disable(self, error: Exception):
        logger.warning(f"Cache operation failed, skipping cache: {error}")
        self._is_available = False

    async def get(self, key: str) -> Optional[dict]:
        if not self._is_available:
            return None
        try:
            value = await self.redis.get(key)
            if value:
                return json.loads(value)
        except (RedisError, OSError) as e:
            self._disable(e)
        return None

    async def set(self, key: str, value: dict, ttl: Optional[int] = None):
        if not self._is_available:
            return
        try:
            await self.redis.setex(key, ttl or self.ttl, json.dumps(value))
        except (RedisError, OSError) as e:
            self._disable(e)

    async def delete(self, *keys: str):
        if not self._is_available or not keys:
            return
        try:
            await self.redis.delete(*keys)
        except (RedisError, OSError) as e:
            self._disable(e)

"""Базовый класс для сервисов."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from pr_reviewer.core.cache import CacheService, get_cache
from pr_reviewer.core.exceptions import InternalException, ServiceException

logger = logging.getLogger("pr-reviewer.service")


class BaseService:
    """Базовый класс для всех сервисов."""

    def __init__(self, session: AsyncSession, timeout: float | None = None):
        self.session = session
        self.timeout = timeout

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[None]:
        """
        Одна операция = одна транзакция.

        Коммит только при успешном выходе из блока; на любом другом пути
        (доменная ошибка, сбой БД, дедлайн, отмена задачи) выполняется откат,
        и вместе с ним снимаются взятые блокировки строк.

        Дедлайн ограничивает тело операции, но не сам COMMIT: начатый коммит
        доводится до конца, поэтому "deadline exceeded" всегда означает откат.
        """
        try:
            async with asyncio.timeout(self.timeout):
                yield
            await self.session.commit()
        except ServiceException:
            await self.session.rollback()
            raise
        except TimeoutError as e:
            await self.session.rollback()
            logger.error(f"Operation exceeded deadline of {self.timeout}s, rolled back")
            raise InternalException("deadline exceeded") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error(f"Storage failure, rolled back: {e}", exc_info=True)
            raise InternalException("storage failure") from e
        except Exception as e:
            await self.session.rollback()
            logger.error(f"Unexpected failure, rolled back: {e}", exc_info=True)
            raise InternalException() from e
        except BaseException:
            await self.session.rollback()
            raise

    async def _get_cache_service(self) -> CacheService:
        """Получить сервис кеширования."""
        redis_client = await get_cache()
        return CacheService(redis_client)

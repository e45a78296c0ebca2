"""Базовый репозиторий."""

from typing import Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from pr_reviewer.core.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Базовый репозиторий: работает в транзакции переданной сессии."""

    def __init__(self, model: type[ModelType], session: AsyncSession):
        self.model = model
        self.session = session

    async def add(self, instance: ModelType) -> ModelType:
        """Добавить запись и отправить INSERT в текущую транзакцию."""
        self.session.add(instance)
        await self.session.flush()
        return instance

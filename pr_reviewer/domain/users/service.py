"""Сервис для работы с пользователями."""

from sqlalchemy.ext.asyncio import AsyncSession

from pr_reviewer.core.cache import team_cache_key
from pr_reviewer.core.exceptions import NotFoundException
from pr_reviewer.db.repositories.user_repository import UserRepository
from pr_reviewer.domain.base_service import BaseService


class UserService(BaseService):
    """Сервис для работы с пользователями."""

    def __init__(self, session: AsyncSession, timeout: float | None = None):
        super().__init__(session, timeout)
        self.user_repo = UserRepository(session)

    async def set_is_active(self, user_id: str, is_active: bool) -> dict:
        """Установить флаг активности пользователя."""
        async with self._transaction():
            user = await self.user_repo.update_active(user_id, is_active)
            if not user:
                raise NotFoundException("User")
            user_data = {
                "user_id": user.user_id,
                "username": user.username,
                "team_name": user.team_name,
                "is_active": user.is_active,
            }

        cache_service = await self._get_cache_service()
        await cache_service.delete(team_cache_key(user_data["team_name"]))

        return {"user": user_data}

    async def get_reviews(self, user_id: str) -> dict:
        """Получить PR'ы, где пользователь назначен ревьювером."""
        async with self._transaction():
            user = await self.user_repo.get_by_id(user_id)
            if not user:
                raise NotFoundException("User")

            prs = await self.user_repo.get_review_prs(user_id)

        return {
            "user_id": user_id,
            "pull_requests": [
                {
                    "pull_request_id": pr.pull_request_id,
                    "pull_request_name": pr.pull_request_name,
                    "author_id": pr.author_id,
                    "status": pr.status,
                }
                for pr in prs
            ],
        }

"""Репозиторий для работы с пользователями."""

from typing import Iterable, List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from pr_reviewer.db.models import PullRequest, User, pr_reviewers
from pr_reviewer.db.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Репозиторий пользователей."""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Получить пользователя по ID (всегда перечитывая строку)."""
        result = await self.session.execute(
            select(User).where(User.user_id == user_id).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_team_name(self, user_id: str) -> Optional[str]:
        """Получить название команды пользователя."""
        result = await self.session.execute(
            select(User.team_name).where(User.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_eligible_ids(self, team_name: str, exclude: Iterable[str] = ()) -> List[str]:
        """
        Получить ID активных участников команды, не входящих в exclude.
        Порядок стабилен (по user_id), чтобы выборка с фиксированным seed была воспроизводима.
        """
        query = select(User.user_id).where(
            User.team_name == team_name,
            User.is_active == True,  # noqa: E712
        )
        excluded = list(exclude)
        if excluded:
            query = query.where(User.user_id.notin_(excluded))
        result = await self.session.execute(query.order_by(User.user_id))
        return list(result.scalars().all())

    async def update_active(self, user_id: str, is_active: bool) -> Optional[User]:
        """Обновить флаг активности."""
        user = await self.get_by_id(user_id)
        if user:
            user.is_active = is_active
            await self.session.flush()
        return user

    async def get_review_prs(self, user_id: str) -> List[PullRequest]:
        """Получить PR'ы, где пользователь ревьювер."""
        query = (
            select(PullRequest)
            .join(pr_reviewers, PullRequest.pull_request_id == pr_reviewers.c.pr_id)
            .where(pr_reviewers.c.reviewer_id == user_id)
            .order_by(PullRequest.created_at.desc(), PullRequest.pull_request_id)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

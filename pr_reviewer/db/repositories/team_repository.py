"""Репозиторий для работы с командами."""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from pr_reviewer.db.models import Team, User
from pr_reviewer.db.repositories.base import BaseRepository


class TeamRepository(BaseRepository[Team]):
    """Репозиторий команд."""

    def __init__(self, session: AsyncSession):
        super().__init__(Team, session)

    async def get_by_name(self, team_name: str, load_members: bool = True) -> Optional[Team]:
        """Получить команду по имени."""
        query = select(Team).where(Team.team_name == team_name)
        if load_members:
            query = query.options(selectinload(Team.members)).execution_options(
                populate_existing=True
            )
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def exists(self, team_name: str) -> bool:
        """Проверить существование команды."""
        result = await self.session.execute(
            select(Team.team_name).where(Team.team_name == team_name)
        )
        return result.scalar_one_or_none() is not None

    async def upsert_member(
        self, team_name: str, user_id: str, username: str, is_active: bool
    ) -> User:
        """Добавить участника в команду или перенести существующего с обновлением полей."""
        user = await self.session.get(User, user_id)
        if user:
            user.username = username
            user.is_active = is_active
            user.team_name = team_name
        else:
            user = User(
                user_id=user_id,
                username=username,
                team_name=team_name,
                is_active=is_active,
            )
            self.session.add(user)
        await self.session.flush()
        return user

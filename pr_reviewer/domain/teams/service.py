"""Сервис для работы с командами."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pr_reviewer.core.cache import team_cache_key
from pr_reviewer.core.exceptions import NotFoundException, TeamExistsException
from pr_reviewer.db.models import Team
from pr_reviewer.db.repositories.team_repository import TeamRepository
from pr_reviewer.db.repositories.user_repository import UserRepository
from pr_reviewer.domain.base_service import BaseService
from pr_reviewer.schemas.team import TeamMemberSchema

logger = logging.getLogger("pr-reviewer.teams")


class TeamService(BaseService):
    """Сервис для работы с командами."""

    def __init__(self, session: AsyncSession, timeout: float | None = None):
        super().__init__(session, timeout)
        self.team_repo = TeamRepository(session)
        self.user_repo = UserRepository(session)

    async def create_team(self, team_name: str, members: list[dict]) -> dict:
        """Создать команду; участники с уже известным ID переносятся в нее."""
        affected_teams = {team_name}
        async with self._transaction():
            if await self.team_repo.exists(team_name):
                raise TeamExistsException()
            try:
                await self.team_repo.add(Team(team_name=team_name))
            except IntegrityError as e:
                raise TeamExistsException() from e

            for member_data in members:
                member = TeamMemberSchema(**member_data)
                previous_team = await self.user_repo.get_team_name(member.user_id)
                if previous_team:
                    affected_teams.add(previous_team)
                await self.team_repo.upsert_member(
                    team_name, member.user_id, member.username, member.is_active
                )

            team = await self.team_repo.get_by_name(team_name, load_members=True)
            team_data = self._team_to_schema(team)

        cache_service = await self._get_cache_service()
        await cache_service.delete(*(team_cache_key(name) for name in affected_teams))
        await cache_service.set(team_cache_key(team_name), team_data)

        logger.info(f"Team {team_name} created with {len(team_data['members'])} members")
        return {"team": team_data}

    async def get_team(self, team_name: str) -> dict:
        """Получить команду с участниками."""
        cache_service = await self._get_cache_service()
        cached_result = await cache_service.get(team_cache_key(team_name))
        if cached_result is not None:
            return {"team": cached_result}

        async with self._transaction():
            team = await self.team_repo.get_by_name(team_name, load_members=True)
            if not team:
                raise NotFoundException("Team")
            team_data = self._team_to_schema(team)

        await cache_service.set(team_cache_key(team_name), team_data)
        return {"team": team_data}

    def _team_to_schema(self, team: Team) -> dict:
        """Преобразовать модель в схему."""
        return {
            "team_name": team.team_name,
            "members": [
                {
                    "user_id": member.user_id,
                    "username": member.username,
                    "is_active": member.is_active,
                }
                for member in sorted(team.members, key=lambda m: m.user_id)
            ],
        }

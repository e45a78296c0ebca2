"""Сервис для работы с Pull Request'ами: создание с автоназначением и переназначение."""

import logging
import random

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from pr_reviewer.core.config import settings
from pr_reviewer.core.exceptions import (
    NotAssignedException,
    NotFoundException,
    PRExistsException,
    PRMergedException,
)
from pr_reviewer.db.models import PullRequest
from pr_reviewer.db.repositories.pr_repository import PRRepository
from pr_reviewer.db.repositories.user_repository import UserRepository
from pr_reviewer.domain.base_service import BaseService
from pr_reviewer.domain.selection import CandidateSelector

logger = logging.getLogger("pr-reviewer.pull_requests")


class PullRequestService(BaseService):
    """Сервис для работы с Pull Request'ами."""

    def __init__(
        self,
        session: AsyncSession,
        timeout: float | None = None,
        rng: random.Random | None = None,
        reviewers_per_pr: int | None = None,
    ):
        super().__init__(session, timeout)
        self.pr_repo = PRRepository(session)
        self.user_repo = UserRepository(session)
        self.selector = CandidateSelector(self.user_repo, rng)
        self.reviewers_per_pr = (
            settings.REVIEWERS_PER_PR if reviewers_per_pr is None else reviewers_per_pr
        )

    async def create_pr(self, pr_id: str, pr_name: str, author_id: str) -> dict:
        """Создать PR и назначить до reviewers_per_pr ревьюверов из команды автора."""
        async with self._transaction():
            author = await self.user_repo.get_by_id(author_id)
            if not author:
                raise NotFoundException("Author")

            reviewer_ids = await self.selector.pick_candidates(
                author.team_name, {author_id}, self.reviewers_per_pr
            )

            if await self.pr_repo.exists(pr_id):
                raise PRExistsException()
            try:
                pr = await self.pr_repo.create_with_reviewers(
                    pr_id, pr_name, author_id, reviewer_ids
                )
            except IntegrityError as e:
                # тот же id успели вставить в параллельной транзакции
                raise PRExistsException() from e

            reviewers = await self.pr_repo.get_reviewer_ids(pr_id)

        logger.info(f"PR {pr_id} created by {author_id}, reviewers: {reviewers}")
        return {"pr": self._pr_to_schema(pr, reviewers)}

    async def get_pr(self, pr_id: str) -> dict:
        """Получить PR по идентификатору."""
        async with self._transaction():
            pr = await self.pr_repo.get_by_id(pr_id)
            if not pr:
                raise NotFoundException("PR")
            reviewers = await self.pr_repo.get_reviewer_ids(pr_id)

        return {"pr": self._pr_to_schema(pr, reviewers)}

    async def merge_pr(self, pr_id: str) -> dict:
        """Пометить PR как MERGED (идемпотентная операция)."""
        async with self._transaction():
            pr = await self.pr_repo.get_for_update(pr_id)
            if not pr:
                raise NotFoundException("PR")
            pr = await self.pr_repo.mark_merged(pr)
            reviewers = await self.pr_repo.get_reviewer_ids(pr_id)

        return {"pr": self._pr_to_schema(pr, reviewers)}

    async def reassign_reviewer(self, pr_id: str, old_user_id: str) -> dict:
        """
        Заменить ревьювера old_user_id другим активным участником его команды.

        Все шаги выполняются в одной транзакции под блокировкой строки PR,
        поэтому параллельные переназначения одного PR выполняются строго
        по очереди, а разные PR друг друга не ждут.
        """
        async with self._transaction():
            pr = await self.pr_repo.get_for_update(pr_id)
            if not pr:
                raise NotFoundException("PR")

            if pr.is_merged:
                raise PRMergedException()

            current_reviewers = await self.pr_repo.get_reviewer_ids(pr_id)
            if old_user_id not in current_reviewers:
                raise NotAssignedException()

            team_name = await self.user_repo.get_team_name(old_user_id)
            if team_name is None:
                raise NotFoundException("User")

            # старый ревьювер остается в исключениях: назначить его самого обратно нельзя
            exclude = set(current_reviewers) | {pr.author_id}
            new_reviewer_id = await self.selector.pick_replacement(team_name, exclude)

            await self.pr_repo.replace_reviewer(pr_id, old_user_id, new_reviewer_id)
            reviewers = await self.pr_repo.get_reviewer_ids(pr_id)

        logger.info(f"PR {pr_id}: reviewer {old_user_id} replaced by {new_reviewer_id}")
        return {"pr": self._pr_to_schema(pr, reviewers), "replaced_by": new_reviewer_id}

    def _pr_to_schema(self, pr: PullRequest, reviewer_ids: list[str]) -> dict:
        """Преобразовать модель в схему."""
        return {
            "pull_request_id": pr.pull_request_id,
            "pull_request_name": pr.pull_request_name,
            "author_id": pr.author_id,
            "status": pr.status,
            "assigned_reviewers": sorted(reviewer_ids),
            "createdAt": pr.created_at.isoformat() if pr.created_at else None,
            "mergedAt": pr.merged_at.isoformat() if pr.merged_at else None,
        }

"""Репозиторий для работы с Pull Request'ами."""

from datetime import datetime
from typing import Iterable

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from pr_reviewer.db.models import PRStatus, PullRequest, pr_reviewers
from pr_reviewer.db.repositories.base import BaseRepository


class PRRepository(BaseRepository[PullRequest]):
    """Репозиторий Pull Request'ов."""

    def __init__(self, session: AsyncSession):
        super().__init__(PullRequest, session)

    async def get_by_id(self, pr_id: str) -> PullRequest | None:
        """Получить PR по ID."""
        result = await self.session.execute(
            select(PullRequest)
            .where(PullRequest.pull_request_id == pr_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_for_update(self, pr_id: str) -> PullRequest | None:
        """
        Получить PR, взяв эксклюзивную блокировку строки (SELECT ... FOR UPDATE).
        Блокировка держится до конца текущей транзакции.
        """
        result = await self.session.execute(
            select(PullRequest)
            .where(PullRequest.pull_request_id == pr_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def exists(self, pr_id: str) -> bool:
        """Проверить существование PR."""
        result = await self.session.execute(
            select(PullRequest.pull_request_id).where(PullRequest.pull_request_id == pr_id)
        )
        return result.scalar_one_or_none() is not None

    async def get_reviewer_ids(self, pr_id: str) -> list[str]:
        """Получить ревьюверов PR в каноническом порядке (по возрастанию ID)."""
        result = await self.session.execute(
            select(pr_reviewers.c.reviewer_id)
            .where(pr_reviewers.c.pr_id == pr_id)
            .order_by(pr_reviewers.c.reviewer_id)
        )
        return list(result.scalars().all())

    async def create_with_reviewers(
        self,
        pr_id: str,
        pr_name: str,
        author_id: str,
        reviewer_ids: Iterable[str],
    ) -> PullRequest:
        """Создать PR со статусом OPEN и назначить ревьюверов."""
        pr = await self.add(
            PullRequest(
                pull_request_id=pr_id,
                pull_request_name=pr_name,
                author_id=author_id,
                status=PRStatus.OPEN.value,
                created_at=datetime.utcnow(),
            )
        )

        values = [{"pr_id": pr_id, "reviewer_id": reviewer_id} for reviewer_id in reviewer_ids]
        if values:
            await self.session.execute(insert(pr_reviewers).values(values))

        return pr

    async def replace_reviewer(self, pr_id: str, old_reviewer_id: str, new_reviewer_id: str):
        """Удалить старого ревьювера и добавить нового в одной транзакции."""
        await self.session.execute(
            delete(pr_reviewers).where(
                pr_reviewers.c.pr_id == pr_id, pr_reviewers.c.reviewer_id == old_reviewer_id
            )
        )
        await self.session.execute(
            insert(pr_reviewers).values(pr_id=pr_id, reviewer_id=new_reviewer_id)
        )

    async def mark_merged(self, pr: PullRequest) -> PullRequest:
        """Пометить PR как MERGED. Для уже смерженного PR ничего не меняет."""
        if pr.is_merged:
            return pr

        pr.status = PRStatus.MERGED.value
        pr.merged_at = datetime.utcnow()
        await self.session.flush()
        return pr

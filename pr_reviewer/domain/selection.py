"""Политика выбора ревьюверов.

Кандидат подходит, если он состоит в нужной команде, активен и не входит
в множество исключений операции. Из подходящих выбирается равномерная
случайная выборка без возвращения.

Две точки вызова имеют разную семантику нехватки кандидатов:

* ``pick_candidates`` (первичное назначение) возвращает столько, сколько
  есть, в том числе ноль;
* ``pick_replacement`` (переназначение) обязан вернуть ровно одного
  кандидата, иначе поднимает ``NoCandidateException``.
"""

import logging
import random
from typing import Iterable, Sequence

from pr_reviewer.core.exceptions import NoCandidateException
from pr_reviewer.db.repositories.user_repository import UserRepository

logger = logging.getLogger("pr-reviewer.selection")


def sample_without_replacement(
    eligible: Sequence[str], count: int, rng: random.Random
) -> list[str]:
    """Выбрать до count различных элементов равновероятно."""
    if count < 0:
        raise ValueError("count must be non-negative")
    return rng.sample(list(eligible), min(count, len(eligible)))


class CandidateSelector:
    """Выбор ревьюверов с подменяемым источником случайности."""

    def __init__(self, user_repo: UserRepository, rng: random.Random | None = None):
        self.user_repo = user_repo
        self.rng = rng or random.Random()

    async def pick_candidates(
        self, team_name: str, exclude: Iterable[str], count: int
    ) -> list[str]:
        """Выбрать до count ревьюверов; меньшее число (включая ноль) не ошибка."""
        if count == 0:
            return []
        eligible = await self.user_repo.get_eligible_ids(team_name, exclude)
        return sample_without_replacement(eligible, count, self.rng)

    async def pick_replacement(self, team_name: str, exclude: Iterable[str]) -> str:
        """Выбрать ровно одного кандидата на замену."""
        exclude = set(exclude)
        picked = await self.pick_candidates(team_name, exclude, 1)
        if not picked:
            logger.warning(
                f"No replacement candidate in team {team_name} (excluded: {sorted(exclude)})"
            )
            raise NoCandidateException()
        return picked[0]

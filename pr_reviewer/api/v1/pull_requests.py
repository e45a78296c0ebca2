"""API эндпоинты для Pull Request'ов."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pr_reviewer.api.dependencies import get_request_timeout, get_session
from pr_reviewer.domain.pull_requests.service import PullRequestService
from pr_reviewer.schemas.pr import (
    CreatePRRequest,
    MergePRRequest,
    PullRequestResponse,
    ReassignRequest,
    ReassignResponse,
)

router = APIRouter(prefix="/pullRequest", tags=["PullRequests"])


@router.post("/create", response_model=PullRequestResponse, status_code=201)
async def create_pr(
    request: CreatePRRequest,
    session: AsyncSession = Depends(get_session),
    timeout: float = Depends(get_request_timeout),
):
    """Создать PR и автоматически назначить ревьюверов из команды автора."""
    return await PullRequestService(session, timeout=timeout).create_pr(
        request.pull_request_id, request.pull_request_name, request.author_id
    )


@router.post("/merge", response_model=PullRequestResponse)
async def merge_pr(
    request: MergePRRequest,
    session: AsyncSession = Depends(get_session),
    timeout: float = Depends(get_request_timeout),
):
    """Пометить PR как MERGED (идемпотентная операция)."""
    return await PullRequestService(session, timeout=timeout).merge_pr(request.pull_request_id)


@router.post("/reassign", response_model=ReassignResponse)
async def reassign_reviewer(
    request: ReassignRequest,
    session: AsyncSession = Depends(get_session),
    timeout: float = Depends(get_request_timeout),
):
    """Переназначить конкретного ревьювера на другого из его команды."""
    return await PullRequestService(session, timeout=timeout).reassign_reviewer(
        request.pull_request_id, request.old_user_id
    )


@router.get("", response_model=PullRequestResponse)
async def get_pr(
    pr_id: str,
    session: AsyncSession = Depends(get_session),
    timeout: float = Depends(get_request_timeout),
):
    """Получить PR по идентификатору."""
    return await PullRequestService(session, timeout=timeout).get_pr(pr_id)

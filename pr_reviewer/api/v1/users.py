"""API эндпоинты для пользователей."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pr_reviewer.api.dependencies import get_request_timeout, get_session
from pr_reviewer.domain.users.service import UserService
from pr_reviewer.schemas.user import GetReviewsResponse, SetIsActiveRequest, UserResponse

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/setIsActive", response_model=UserResponse)
async def set_is_active(
    request: SetIsActiveRequest,
    session: AsyncSession = Depends(get_session),
    timeout: float = Depends(get_request_timeout),
):
    """Установить флаг активности пользователя."""
    return await UserService(session, timeout=timeout).set_is_active(
        request.user_id, request.is_active
    )


@router.get("/getReview", response_model=GetReviewsResponse)
async def get_reviews(
    user_id: str,
    session: AsyncSession = Depends(get_session),
    timeout: float = Depends(get_request_timeout),
):
    """Получить PR'ы, где пользователь назначен ревьювером."""
    return await UserService(session, timeout=timeout).get_reviews(user_id)

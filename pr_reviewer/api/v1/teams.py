"""API эндпоинты для команд."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from pr_reviewer.api.dependencies import get_request_timeout, get_session
from pr_reviewer.domain.teams.service import TeamService
from pr_reviewer.schemas.team import CreateTeamRequest, TeamResponse, TeamSchema

router = APIRouter(prefix="/team", tags=["Teams"])


@router.post("/add", response_model=TeamResponse, status_code=201)
async def create_team(
    request: CreateTeamRequest,
    session: AsyncSession = Depends(get_session),
    timeout: float = Depends(get_request_timeout),
):
    """Создать команду с участниками (участники создаются или обновляются)."""
    return await TeamService(session, timeout=timeout).create_team(
        request.team_name, [m.model_dump() for m in request.members]
    )


@router.get("/get", response_model=TeamSchema)
async def get_team(
    team_name: str,
    session: AsyncSession = Depends(get_session),
    timeout: float = Depends(get_request_timeout),
):
    """Получить команду с участниками."""
    result = await TeamService(session, timeout=timeout).get_team(team_name)
    return result["team"]

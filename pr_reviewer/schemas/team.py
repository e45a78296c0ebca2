"""Схемы для команд."""

from pydantic import BaseModel, ConfigDict, Field


class TeamMemberSchema(BaseModel):
    """Схема участника команды."""

    user_id: str = Field(min_length=1)
    username: str
    is_active: bool = True


class TeamSchema(BaseModel):
    """Схема команды."""

    team_name: str
    members: list[TeamMemberSchema]

    model_config = ConfigDict(from_attributes=True)


class TeamResponse(BaseModel):
    """Ответ с командой."""

    team: TeamSchema


class CreateTeamRequest(BaseModel):
    """Запрос на создание команды."""

    team_name: str = Field(min_length=1)
    members: list[TeamMemberSchema] = Field(default_factory=list)

"""SQLAlchemy модели базы данных."""

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
)
from sqlalchemy.orm import relationship

from pr_reviewer.core.database import Base


class PRStatus(str, Enum):
    """Статус PR. MERGED терминален."""

    OPEN = "OPEN"
    MERGED = "MERGED"


pr_reviewers = Table(
    "pr_reviewers",
    Base.metadata,
    Column(
        "pr_id",
        String(255),
        ForeignKey("pull_requests.pull_request_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "reviewer_id",
        String(255),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Index("idx_pr_reviewers_reviewer", "reviewer_id"),
    comment="Назначенные ревьюверы",
)


class Team(Base):
    """Модель команды."""

    __tablename__ = "teams"
    __table_args__ = {"comment": "Команды"}

    team_name = Column(String(255), primary_key=True, comment="Название команды")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, comment="Дата создания")

    members = relationship("User", back_populates="team", order_by="User.user_id")


class User(Base):
    """Модель пользователя (участника команды)."""

    __tablename__ = "users"
    __table_args__ = (
        Index("idx_users_team_active", "team_name", "is_active"),
        {"comment": "Пользователи"},
    )

    user_id = Column(String(255), primary_key=True, comment="ID пользователя")
    username = Column(String(255), nullable=False, comment="Имя пользователя")
    team_name = Column(
        String(255),
        ForeignKey("teams.team_name", ondelete="CASCADE"),
        nullable=False,
        comment="Название команды",
    )
    is_active = Column(Boolean, default=True, nullable=False, comment="Флаг активности")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, comment="Дата создания")

    team = relationship("Team", back_populates="members")


class PullRequest(Base):
    """Модель Pull Request."""

    __tablename__ = "pull_requests"
    __table_args__ = (
        Index("idx_pr_author", "author_id"),
        {"comment": "Pull Request'ы"},
    )

    pull_request_id = Column(String(255), primary_key=True, comment="ID PR")
    pull_request_name = Column(String(500), nullable=False, comment="Название PR")
    author_id = Column(
        String(255),
        ForeignKey("users.user_id", ondelete="CASCADE"),
        nullable=False,
        comment="ID автора",
    )
    status = Column(
        String(20), default=PRStatus.OPEN.value, nullable=False, comment="Статус: OPEN или MERGED"
    )
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, comment="Дата создания")
    merged_at = Column(DateTime, nullable=True, comment="Дата merge")

    @property
    def is_merged(self) -> bool:
        return self.status == PRStatus.MERGED.value

"""Доменные ошибки сервиса."""

from enum import Enum


class ErrorCode(str, Enum):
    """Закрытый набор кодов ошибок."""

    TEAM_EXISTS = "TEAM_EXISTS"
    PR_EXISTS = "PR_EXISTS"
    NOT_FOUND = "NOT_FOUND"
    PR_MERGED = "PR_MERGED"
    NOT_ASSIGNED = "NOT_ASSIGNED"
    NO_CANDIDATE = "NO_CANDIDATE"
    INTERNAL = "INTERNAL"


class ServiceException(Exception):
    """Базовое исключение сервиса."""

    def __init__(self, code: ErrorCode, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def to_dict(self) -> dict:
        return {"code": self.code.value, "message": self.message}


class TeamExistsException(ServiceException):
    """Команда уже существует."""

    def __init__(self):
        super().__init__(ErrorCode.TEAM_EXISTS, "team_name already exists")


class NotFoundException(ServiceException):
    """Ресурс не найден."""

    def __init__(self, resource: str = "resource"):
        super().__init__(ErrorCode.NOT_FOUND, f"{resource} not found")
        self.resource = resource


class PRExistsException(ServiceException):
    """PR уже существует."""

    def __init__(self):
        super().__init__(ErrorCode.PR_EXISTS, "PR id already exists")


class PRMergedException(ServiceException):
    """PR уже в статусе MERGED."""

    def __init__(self):
        super().__init__(ErrorCode.PR_MERGED, "cannot reassign on merged PR")


class NotAssignedException(ServiceException):
    """Ревьювер не назначен на PR."""

    def __init__(self):
        super().__init__(ErrorCode.NOT_ASSIGNED, "reviewer is not assigned to this PR")


class NoCandidateException(ServiceException):
    """Нет доступных кандидатов для переназначения."""

    def __init__(self):
        super().__init__(ErrorCode.NO_CANDIDATE, "no active replacement candidate in team")


class InternalException(ServiceException):
    """Сбой хранилища, истечение дедлайна или иная непредвиденная ошибка."""

    def __init__(self, message: str = "internal error"):
        super().__init__(ErrorCode.INTERNAL, message)

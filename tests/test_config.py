"""Тесты конфигурации."""

import pytest
from pydantic import ValidationError

from pr_reviewer.core.config import Settings


def test_defaults():
    config = Settings(_env_file=None)
    assert config.REVIEWERS_PER_PR == 2
    assert config.REQUEST_TIMEOUT == 5.0


def test_reviewers_per_pr_from_env(monkeypatch):
    monkeypatch.setenv("REVIEWERS_PER_PR", "3")
    assert Settings(_env_file=None).REVIEWERS_PER_PR == 3


def test_negative_reviewers_per_pr_rejected(monkeypatch):
    """Отрицательное число ревьюверов отклоняется при загрузке настроек."""
    monkeypatch.setenv("REVIEWERS_PER_PR", "-1")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_non_positive_timeout_rejected(monkeypatch):
    monkeypatch.setenv("REQUEST_TIMEOUT", "0")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)

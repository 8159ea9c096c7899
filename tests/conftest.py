"""Shared pytest fixtures."""

from unittest.mock import MagicMock

import pytest

from attendance_bot.config import Settings
from attendance_bot.models import CourseAttendance
from attendance_bot.notify.base import Notifier


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings with the file backend, independent of the environment."""
    return Settings(
        _env_file=None,
        cybervidya_base_url="https://portal.example.test/",
        cybervidya_username="2100290100001",
        cybervidya_password="secret",
        telegram_bot_token="123:abc",
        telegram_chat_id="42",
        snapshot_backend="file",
        snapshot_file=str(tmp_path / "state.json"),
    )


@pytest.fixture
def notifier() -> MagicMock:
    """Notifier that reports every message as delivered."""
    mock = MagicMock(spec=Notifier)
    mock.send_message.return_value = True
    return mock


@pytest.fixture
def make_course():
    """Factory for fetched course records."""
    def _make(code: str, present: int, total: int, name: str = "") -> CourseAttendance:
        return CourseAttendance(
            code=code,
            name=name or f"{code} Course",
            present=present,
            total=total,
        )
    return _make

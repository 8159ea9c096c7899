"""Tests for the monitoring pipeline."""

from unittest.mock import MagicMock, patch

import pytest

from attendance_bot.auth import CyberVidyaAuthError
from attendance_bot.db import FileSnapshotStore, SnapshotStore
from attendance_bot.main import AttendanceMonitor, main
from attendance_bot.models import CourseCounters


@pytest.fixture
def store(settings) -> FileSnapshotStore:
    return FileSnapshotStore(settings.snapshot_file)


def make_monitor(settings, store, notifier, courses=None, error=None) -> AttendanceMonitor:
    monitor = AttendanceMonitor(settings=settings, store=store, notifier=notifier)
    fetch = MagicMock(return_value=courses or [])
    if error is not None:
        fetch.side_effect = error
    monitor._fetch_courses = fetch
    return monitor


class TestAttendanceMonitor:
    """Tests for AttendanceMonitor.run."""

    def test_first_run_alerts_and_saves(self, settings, store, notifier, make_course):
        courses = [make_course("CS101", 5, 10, name="Algorithms"), make_course("MA201", 9, 10)]
        monitor = make_monitor(settings, store, notifier, courses)

        assert monitor.run() is True

        assert notifier.send_message.call_count == 2
        first_message = notifier.send_message.call_args_list[0].args[0]
        assert "*Algorithms*" in first_message
        assert store.load() == {
            "CS101": CourseCounters(present=5, total=10),
            "MA201": CourseCounters(present=9, total=10),
        }
        assert monitor.stats["notifications_sent"] == 2

    def test_unchanged_run_sends_nothing(self, settings, store, notifier, make_course):
        store.save({"CS101": CourseCounters(present=8, total=10)})
        monitor = make_monitor(settings, store, notifier, [make_course("CS101", 8, 10)])

        assert monitor.run() is True

        notifier.send_message.assert_not_called()
        assert store.load() == {"CS101": CourseCounters(present=8, total=10)}

    def test_delivery_failure_does_not_stop_other_alerts(self, settings, store, notifier, make_course):
        notifier.send_message.side_effect = [RuntimeError("telegram down"), False, True]
        courses = [make_course("A1", 1, 1), make_course("B2", 0, 1), make_course("C3", 2, 2)]
        monitor = make_monitor(settings, store, notifier, courses)

        assert monitor.run() is True

        assert notifier.send_message.call_count == 3
        assert monitor.stats["notifications_sent"] == 1
        assert monitor.stats["errors"] == 2
        assert set(store.load()) == {"A1", "B2", "C3"}

    def test_empty_fetch_skips_save(self, settings, notifier):
        store = MagicMock(spec=SnapshotStore)
        store.load.return_value = {"CS101": CourseCounters(present=8, total=10)}
        monitor = make_monitor(settings, store, notifier, [])

        assert monitor.run() is True

        store.save.assert_not_called()
        notifier.send_message.assert_not_called()

    def test_save_failure_is_counted(self, settings, notifier, make_course):
        store = MagicMock(spec=SnapshotStore)
        store.load.return_value = {}
        store.save.return_value = False
        monitor = make_monitor(settings, store, notifier, [make_course("CS101", 1, 2)])

        assert monitor.run() is True
        assert monitor.stats["errors"] == 1

    def test_fetch_failure_reports_error(self, settings, store, notifier):
        monitor = make_monitor(settings, store, notifier, error=CyberVidyaAuthError("Login failed"))

        assert monitor.run() is False

        notifier.send_message.assert_called_once_with("Attendance Bot Error: Login failed")
        assert store.load() == {}

    def test_error_notification_failure_is_swallowed(self, settings, store, notifier):
        notifier.send_message.side_effect = RuntimeError("telegram down")
        monitor = make_monitor(settings, store, notifier, error=RuntimeError("boom"))

        assert monitor.run() is False

    def test_fetch_uses_session_and_scraper(self, settings, store, notifier, make_course):
        monitor = AttendanceMonitor(settings=settings, store=store, notifier=notifier)

        with patch("attendance_bot.main.CyberVidyaSession") as session_cls, \
             patch("attendance_bot.main.CourseScraper") as scraper_cls:
            scraper_cls.return_value.scrape.return_value = [make_course("CS101", 1, 1)]
            assert monitor.run() is True

        session_cls.assert_called_once_with(settings)
        scraper_cls.assert_called_once_with(session_cls.return_value.__enter__.return_value)
        notifier.send_message.assert_called_once()


class TestMain:
    """Tests for the main() entry point."""

    def test_configuration_error_exits_1(self):
        with patch("attendance_bot.main.setup_logging"), \
             patch("attendance_bot.main.get_settings", side_effect=ValueError("missing")):
            assert main() == 1

    @pytest.mark.parametrize("success,code", [(True, 0), (False, 1)])
    def test_exit_code_follows_run(self, settings, success, code):
        with patch("attendance_bot.main.setup_logging"), \
             patch("attendance_bot.main.get_settings", return_value=settings), \
             patch("attendance_bot.main.AttendanceMonitor") as monitor_cls:
            monitor_cls.return_value.run.return_value = success
            assert main() == code
        monitor_cls.assert_called_once_with(settings)

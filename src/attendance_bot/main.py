"""
Main orchestrator for the Attendance Bot.

Coordinates the full monitoring workflow:
1. Login to CyberVidya
2. Fetch registered courses with attendance counters
3. Load the previous snapshot
4. Diff against the previous snapshot
5. Send Telegram notifications for changed courses
6. Save the new snapshot
"""

import logging
import sys
from typing import List, Optional

from attendance_bot.auth import CyberVidyaSession
from attendance_bot.config import Settings, get_settings, setup_logging
from attendance_bot.db import SnapshotStore, get_snapshot_store
from attendance_bot.models import CourseAlert, CourseAttendance
from attendance_bot.notify import MessageFormatter, Notifier, TelegramNotifier
from attendance_bot.scrapers import CourseScraper
from attendance_bot.tracker import diff_snapshot

logger = logging.getLogger(__name__)


class AttendanceMonitor:
    """
    Main orchestrator for attendance monitoring.

    Collaborators are built from settings unless passed in explicitly.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[SnapshotStore] = None,
        notifier: Optional[Notifier] = None,
        formatter: Optional[MessageFormatter] = None,
    ):
        """Initialize the monitor with all components."""
        self.settings = settings or get_settings()
        self.store = store or get_snapshot_store(self.settings)
        self.notifier = notifier or TelegramNotifier(settings=self.settings)
        self.formatter = formatter or MessageFormatter()

        # Track stats
        self.stats = {
            "courses_fetched": 0,
            "changes_detected": 0,
            "notifications_sent": 0,
            "errors": 0,
        }

    def run(self) -> bool:
        """
        Execute full monitoring workflow.

        Returns:
            bool: True if completed successfully
        """
        logger.info("=" * 50)
        logger.info("Starting attendance check")
        logger.info("=" * 50)

        try:
            courses = self._fetch_courses()
            self.stats["courses_fetched"] = len(courses)

            previous = self.store.load()
            result = diff_snapshot(previous, courses)
            self.stats["changes_detected"] = len(result.alerts)

            self._send_notifications(result.alerts)

            if result.should_persist:
                if not self.store.save(result.snapshot):
                    self.stats["errors"] += 1
            else:
                logger.warning("No courses fetched, keeping previous state")

            self._log_summary()
            logger.info("Attendance check completed successfully.")
            return True

        except Exception as e:
            logger.error(f"An error occurred during the attendance check: {e}", exc_info=True)
            self.stats["errors"] += 1

            try:
                self.notifier.send_message(self.formatter.format_error(str(e)))
            except Exception:
                logger.debug("Error notification could not be delivered")

            return False

    def _fetch_courses(self) -> List[CourseAttendance]:
        """Login and fetch registered courses."""
        with CyberVidyaSession(self.settings) as session:
            return CourseScraper(session).scrape()

    def _send_notifications(self, alerts: List[CourseAlert]) -> None:
        """
        Send one notification per changed course, in course order.

        Args:
            alerts: Alerts produced by the snapshot diff
        """
        if not alerts:
            logger.info("No attendance changes to notify")
            return

        logger.info(f"Sending {len(alerts)} notifications...")
        for alert in alerts:
            self._send_alert(alert)

    def _send_alert(self, alert: CourseAlert) -> bool:
        """
        Send a single alert. Failures are logged and never interrupt the loop.

        Args:
            alert: The alert to deliver

        Returns:
            bool: True if sent successfully
        """
        try:
            if self.notifier.send_message(self.formatter.format_alert(alert)):
                self.stats["notifications_sent"] += 1
                return True
            logger.warning(f"Failed to send notification for: {alert.course.code}")
        except Exception as e:
            logger.error(f"Error sending notification for {alert.course.code}: {e}")

        self.stats["errors"] += 1
        return False

    def _log_summary(self) -> None:
        """Log execution summary."""
        logger.info("=" * 50)
        logger.info("Attendance Check - Summary")
        logger.info("=" * 50)
        logger.info(f"Courses fetched:      {self.stats['courses_fetched']}")
        logger.info(f"Changes detected:     {self.stats['changes_detected']}")
        logger.info(f"Notifications sent:   {self.stats['notifications_sent']}")
        logger.info(f"Errors:               {self.stats['errors']}")
        logger.info("=" * 50)


def main() -> int:
    """
    Entry point for the Attendance Bot.

    Returns:
        int: Exit code (0 for success, 1 for failure)
    """
    setup_logging()

    try:
        # Validate configuration early
        settings = get_settings()
        logger.debug(f"Loaded configuration for {settings.cybervidya_base_url}")
        monitor = AttendanceMonitor(settings)
    except Exception as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        print("Please check your environment variables.", file=sys.stderr)
        return 1

    success = monitor.run()

    return 0 if success else 1


if __name__ == "__main__":
    sys.exit(main())

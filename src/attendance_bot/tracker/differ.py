"""
Snapshot differ.

Compares a fresh course fetch against the previous run's snapshot and
collects the alerts to send plus the snapshot to persist.
"""

import logging
from typing import Mapping, Sequence

from attendance_bot.models import (
    ChangeStatus,
    CourseAlert,
    CourseAttendance,
    CourseCounters,
    SnapshotDiff,
)
from attendance_bot.tracker.classifier import classify_change
from attendance_bot.tracker.metrics import compute_alert

logger = logging.getLogger(__name__)


def diff_snapshot(
    previous: Mapping[str, CourseCounters],
    courses: Sequence[CourseAttendance],
) -> SnapshotDiff:
    """
    Classify every fetched course against the previous snapshot.

    Every fetched course lands in the new snapshot with its latest
    counters. Courses missing from the fetch are dropped without an alert.
    `previous` is never modified.

    Args:
        previous: Snapshot loaded at the start of the run
        courses: Fetched courses, in portal order

    Returns:
        SnapshotDiff: New snapshot and alerts in fetch order
    """
    result = SnapshotDiff()

    for course in courses:
        current = course.counters
        result.snapshot[course.code] = current

        status = classify_change(previous.get(course.code), current)
        if status is ChangeStatus.UNCHANGED:
            continue

        logger.info(f"Change detected for {course.code}: {status.value}")
        payload = compute_alert(
            course.display_name,
            course.present,
            course.total,
            status,
        )
        result.alerts.append(
            CourseAlert(course=course, status=status, payload=payload)
        )

    return result

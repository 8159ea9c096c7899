"""
Attendance-risk metrics against the 75% requirement.
"""

import math

from attendance_bot.models import AlertPayload, ChangeStatus, Severity

MIN_ATTENDANCE_PERCENT = 75
MIN_ATTENDANCE_RATIO = 0.75


def attendance_percentage(present: int, total: int) -> float:
    """Percentage of lectures attended, 0 when nothing has been held yet."""
    return present / total * 100 if total > 0 else 0.0


def lectures_needed(present: int, total: int) -> int:
    """
    Consecutive lectures to attend before reaching 75%.

    Each attended lecture adds one to both present and total, so the gap
    closes by 0.25 per lecture.
    """
    return max(0, math.ceil((MIN_ATTENDANCE_RATIO * total - present) / 0.25))


def lectures_skippable(present: int, total: int) -> int:
    """Lectures that can be missed while staying at or above 75%."""
    return max(0, math.floor(present / MIN_ATTENDANCE_RATIO - total))


def compute_alert(
    course_label: str,
    present: int,
    total: int,
    status: ChangeStatus,
) -> AlertPayload:
    """
    Build the alert payload for a changed course.

    The status is carried along for display only; severity and action
    count depend on the counters alone.

    Args:
        course_label: Course name for display
        present: Lectures attended
        total: Lectures held
        status: Classified change

    Returns:
        AlertPayload: Percentage, severity and action count
    """
    percentage = attendance_percentage(present, total)

    if percentage < MIN_ATTENDANCE_PERCENT:
        severity = Severity.CRITICAL
        action_count = lectures_needed(present, total)
    else:
        severity = Severity.SECURE
        action_count = lectures_skippable(present, total)

    return AlertPayload(
        course_label=course_label,
        present=present,
        total=total,
        percentage=percentage,
        severity=severity,
        action_count=action_count,
        status=status,
    )

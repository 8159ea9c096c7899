"""
Change classification for per-course attendance counters.
"""

from typing import Optional

from attendance_bot.models import ChangeStatus, CourseCounters

# Baseline for a course that has never been seen before
EMPTY_COUNTERS = CourseCounters(present=0, total=0)


def classify_change(
    previous: Optional[CourseCounters],
    current: CourseCounters,
) -> ChangeStatus:
    """
    Decide how a course's counters moved since the last run.

    A new lecture that was attended is PRESENT, a new lecture that was
    missed is ABSENT. Everything else that differs (corrections, rollbacks,
    present changing without a new lecture) is UNKNOWN.

    Args:
        previous: Counters from the last snapshot, None if the course is new
        current: Freshly fetched counters

    Returns:
        ChangeStatus: Classification of the change
    """
    if previous is None:
        previous = EMPTY_COUNTERS

    if current.present == previous.present and current.total == previous.total:
        return ChangeStatus.UNCHANGED

    if current.total > previous.total:
        if current.present > previous.present:
            return ChangeStatus.PRESENT
        if current.present == previous.present:
            return ChangeStatus.ABSENT

    return ChangeStatus.UNKNOWN

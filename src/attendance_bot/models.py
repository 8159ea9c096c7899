"""
Data models for the Attendance Bot.

Defines Pydantic models for the attendance data flowing through a run:
- CourseAttendance (one fetched course record)
- CourseCounters / Snapshot (persisted state)
- AlertPayload / CourseAlert (per-course change notification)
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, computed_field


class ChangeStatus(str, Enum):
    """How a course's counters moved since the last run."""
    UNCHANGED = "unchanged"
    PRESENT = "present"
    ABSENT = "absent"
    UNKNOWN = "unknown"


class Severity(str, Enum):
    """Attendance standing against the 75% requirement."""
    CRITICAL = "critical"
    SECURE = "secure"


class CourseCounters(BaseModel):
    """
    Lecture counters for one course at a point in time.

    No range validation: the portal occasionally reports present > total
    and such records still have to be classified.
    """
    present: int = 0
    total: int = 0


# Course code -> counters, as of the last successful run
Snapshot = Dict[str, CourseCounters]


class CourseAttendance(BaseModel):
    """
    Represents a registered course as returned by the portal.

    Attributes:
        code: Unique course code (e.g., "KCS501")
        name: Full course name
        present: Lectures attended so far
        total: Lectures held so far
    """
    code: str
    name: str
    present: int
    total: int

    @computed_field
    @property
    def display_name(self) -> str:
        """Formatted course name for display."""
        return self.name or self.code

    @property
    def counters(self) -> CourseCounters:
        return CourseCounters(present=self.present, total=self.total)


class AlertPayload(BaseModel):
    """
    Attendance-risk figures for one changed course.

    Attributes:
        course_label: Course name shown in the notification
        present: Lectures attended
        total: Lectures held
        percentage: present / total * 100 (0 when no lectures held yet)
        severity: CRITICAL below 75%, SECURE otherwise
        action_count: Lectures to attend (CRITICAL) or affordable to skip (SECURE)
        status: The change that triggered the alert
    """
    course_label: str
    present: int
    total: int
    percentage: float
    severity: Severity
    action_count: int = Field(..., ge=0)
    status: ChangeStatus


class CourseAlert(BaseModel):
    """A detected change together with the course it belongs to."""
    course: CourseAttendance
    status: ChangeStatus
    payload: AlertPayload


class SnapshotDiff(BaseModel):
    """
    Result of comparing a fresh fetch against the previous snapshot.

    Attributes:
        snapshot: Latest counters for every course in the fetch
        alerts: One entry per changed course, in fetch order
    """
    snapshot: Snapshot = Field(default_factory=dict)
    alerts: List[CourseAlert] = Field(default_factory=list)

    @property
    def should_persist(self) -> bool:
        """Only write state back when the fetch returned courses."""
        return bool(self.snapshot)


class StoredSnapshot(BaseModel):
    """
    Persisted snapshot document.

    Stored in Supabase (or a local JSON file) between runs.
    """
    state: Snapshot = Field(default_factory=dict)
    last_updated: Optional[datetime] = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

"""Attendance change tracking - classification, metrics and snapshot diffing."""

from attendance_bot.tracker.classifier import classify_change
from attendance_bot.tracker.differ import diff_snapshot
from attendance_bot.tracker.metrics import compute_alert

__all__ = ["classify_change", "compute_alert", "diff_snapshot"]

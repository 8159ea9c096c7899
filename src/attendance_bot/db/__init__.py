"""Database module for the Attendance Bot - snapshot persistence."""

from attendance_bot.db.client import get_supabase_client
from attendance_bot.db.snapshot_store import (
    FileSnapshotStore,
    SnapshotStore,
    SupabaseSnapshotStore,
    get_snapshot_store,
)

__all__ = [
    "get_supabase_client",
    "get_snapshot_store",
    "SnapshotStore",
    "SupabaseSnapshotStore",
    "FileSnapshotStore",
]

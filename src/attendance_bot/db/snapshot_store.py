"""
Snapshot store for change detection.

Keeps the last-known attendance counters between runs. Reads degrade to an
empty snapshot (every course treated as first-seen) and writes report
failure instead of raising, so storage problems never abort a run.
"""

import json
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

from supabase import Client

from attendance_bot.config import Settings, get_settings
from attendance_bot.db.client import build_supabase_client, get_supabase_client
from attendance_bot.models import Snapshot, StoredSnapshot

logger = logging.getLogger(__name__)

# Table name in Supabase
TABLE_NAME = "attendance_state"


class SnapshotStore(ABC):
    """Loads and saves the attendance snapshot."""

    @abstractmethod
    def load(self) -> Snapshot:
        """Return the last saved snapshot, or an empty one."""

    @abstractmethod
    def save(self, snapshot: Snapshot) -> bool:
        """Persist the snapshot. Returns False on failure."""

    @staticmethod
    def _document(snapshot: Snapshot) -> StoredSnapshot:
        return StoredSnapshot(state=snapshot, last_updated=datetime.now(timezone.utc))


class SupabaseSnapshotStore(SnapshotStore):
    """
    Stores the snapshot as a single JSON document row in Supabase.

    Row layout: id (snapshot key), state (jsonb), last_updated (timestamptz).
    """

    def __init__(self, client: Optional[Client] = None, key: Optional[str] = None):
        """
        Initialize the snapshot store.

        Args:
            client: Optional Supabase client, will use default if not provided
            key: Row id of the snapshot document
        """
        self.client = client or get_supabase_client()
        self.key = key or get_settings().snapshot_key
        self.table = self.client.table(TABLE_NAME)

    def load(self) -> Snapshot:
        try:
            result = (
                self.table
                .select("state, last_updated")
                .eq("id", self.key)
                .execute()
            )

            if not result.data:
                logger.info("No previous attendance state found")
                return {}

            document = StoredSnapshot.model_validate(result.data[0])
            logger.debug(f"Loaded state saved at {document.last_updated}")
            return document.state

        except Exception as e:
            logger.error(f"Error reading attendance state from Supabase: {e}")
            return {}

    def save(self, snapshot: Snapshot) -> bool:
        try:
            document = self._document(snapshot)
            record = {"id": self.key, **document.model_dump(mode="json")}

            self.table.upsert(record, on_conflict="id").execute()

            logger.info("State saved to Supabase")
            return True

        except Exception as e:
            logger.error(f"Error saving attendance state to Supabase: {e}")
            return False


class FileSnapshotStore(SnapshotStore):
    """Stores the snapshot document as a JSON file, for local runs."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Snapshot:
        if not self.path.exists():
            logger.info(f"No previous attendance state at {self.path}")
            return {}

        try:
            raw = self.path.read_text(encoding="utf-8")
            return StoredSnapshot.model_validate_json(raw).state
        except (OSError, ValueError) as e:
            logger.error(f"Error reading attendance state from {self.path}: {e}")
            return {}

    def save(self, snapshot: Snapshot) -> bool:
        try:
            document = self._document(snapshot)
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                json.dumps(document.model_dump(mode="json"), indent=2),
                encoding="utf-8",
            )
            logger.info(f"State saved to {self.path}")
            return True
        except OSError as e:
            logger.error(f"Error saving attendance state to {self.path}: {e}")
            return False


def get_snapshot_store(settings: Optional[Settings] = None) -> SnapshotStore:
    """
    Build the snapshot store selected by configuration.

    Args:
        settings: Optional settings instance, will be loaded if not provided

    Returns:
        SnapshotStore: Supabase- or file-backed store
    """
    settings = settings or get_settings()

    if settings.snapshot_backend == "file":
        return FileSnapshotStore(settings.snapshot_file)

    return SupabaseSnapshotStore(
        build_supabase_client(settings),
        key=settings.snapshot_key,
    )


# SQL for creating the Supabase table (run this in Supabase SQL Editor)
CREATE_TABLE_SQL = """
-- Create attendance_state table holding the last-known snapshot
CREATE TABLE IF NOT EXISTS attendance_state (
    id TEXT PRIMARY KEY,
    state JSONB NOT NULL DEFAULT '{}'::jsonb,
    last_updated TIMESTAMPTZ DEFAULT NOW()
);

-- Enable Row Level Security (optional but recommended)
ALTER TABLE attendance_state ENABLE ROW LEVEL SECURITY;

-- Create policy for service role (full access)
CREATE POLICY "Service role has full access" ON attendance_state
    FOR ALL
    USING (true)
    WITH CHECK (true);
"""

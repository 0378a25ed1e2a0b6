"""Local generation history.

A single store object owns the list of past generations: it loads from its
JSON file when constructed and rewrites that file after every mutation.
Records are kept newest first and capped; the oldest ones are evicted.
"""

from __future__ import annotations

import json
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from reelsmith.observability.logging import get_logger

logger = get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 10


def _new_record_id() -> str:
    return uuid4().hex[:12]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GeneratedVideoRecord(BaseModel):
    """One successful generation, as remembered by the client."""

    id: str = Field(default_factory=_new_record_id)
    text: str
    style: str
    duration: int | float
    video_path: str = Field(..., description="Local file holding the video bytes")
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def download_name(self) -> str:
        return f"video-{self.id}.mp4"


_RECORDS = TypeAdapter(list[GeneratedVideoRecord])


class HistoryStore:
    """Size-capped, newest-first history persisted to a JSON file."""

    def __init__(self, path: str | Path, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 1:
            raise ValueError("history limit must be at least 1")
        self.path = Path(path).expanduser()
        self.limit = limit
        self._records: list[GeneratedVideoRecord] = self._load()

    def _load(self) -> list[GeneratedVideoRecord]:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return []
        try:
            records = _RECORDS.validate_json(raw)
        except PydanticValidationError as exc:
            logger.warning("history_load_failed", path=str(self.path), error=str(exc))
            return []
        # A file written under a larger limit is trimmed on the next mutation.
        return records[: self.limit]

    def _persist(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = _RECORDS.dump_json(self._records, indent=2)
        fd, tmp_name = tempfile.mkstemp(prefix=".history_", dir=str(self.path.parent))
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(payload)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    @property
    def records(self) -> list[GeneratedVideoRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    @property
    def is_full(self) -> bool:
        return len(self._records) >= self.limit

    def get(self, record_id: str) -> Optional[GeneratedVideoRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def append(self, record: GeneratedVideoRecord) -> list[GeneratedVideoRecord]:
        """Add `record` as the newest entry and return any evicted records."""
        self._records.insert(0, record)
        evicted = self._records[self.limit :]
        del self._records[self.limit :]
        self._persist()
        if evicted:
            logger.info("history_evicted", count=len(evicted), ids=[r.id for r in evicted])
        return evicted

    def clear(self) -> list[GeneratedVideoRecord]:
        """Drop every record and remove the backing file."""
        removed = self._records
        self._records = []
        self.path.unlink(missing_ok=True)
        logger.info("history_cleared", count=len(removed))
        return removed


def dumps_records(records: list[GeneratedVideoRecord]) -> str:
    """JSON text for `records`, as printed by `history list --json`."""
    return json.dumps([r.model_dump(mode="json") for r in records], indent=2)


__all__ = [
    "DEFAULT_HISTORY_LIMIT",
    "GeneratedVideoRecord",
    "HistoryStore",
    "dumps_records",
]

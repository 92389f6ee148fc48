from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Dict, Optional, Union
from uuid import uuid4

from pydantic import BaseModel

from models.errors import RecordNotFoundError
from models.readings import (
    HistoricalRecord,
    MotionReading,
    MotionStatus,
    MovingMotion,
    PersistedMotion,
    StaticMotion,
)
from settings import get_settings

logger = logging.getLogger(__name__)


class StoredReading(BaseModel):
    record_id: str
    stored_at: datetime
    reading: MotionReading


class MockMotionTable:
    """In-memory motion store acting as both history lookup and persistence."""

    def __init__(self, name: str, persistence_path: Optional[Path] = None) -> None:
        self.name = name
        self._items: Dict[str, StoredReading] = {}
        self.persistence_path = persistence_path
        self._lock = Lock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    async def create(self, record: MovingMotion) -> PersistedMotion:
        stored = self._put(record)
        logger.info(
            "Stored moving reading",
            extra={"record_id": stored.record_id, "device_id": record.device_id},
        )
        return PersistedMotion(
            record_id=stored.record_id,
            stored_at=stored.stored_at,
            reading=stored.reading.model_copy(deep=True),
        )

    def add_reading(self, reading: Union[StaticMotion, MovingMotion]) -> str:
        """Seed the table with a reading of either state; returns its record id."""
        return self._put(reading).record_id

    async def get_last_moving_record(self, device_id: str) -> HistoricalRecord:
        return self._last_record(device_id, "moving")

    async def get_last_static_record(self, device_id: str) -> HistoricalRecord:
        return self._last_record(device_id, "static")

    def scan(self) -> list[Union[StaticMotion, MovingMotion]]:
        """Return deep copies of all stored readings."""

        with self._lock:
            return [item.reading.model_copy(deep=True) for item in self._items.values()]

    def _put(self, reading: Union[StaticMotion, MovingMotion]) -> StoredReading:
        stored = StoredReading(
            record_id=str(uuid4()),
            stored_at=datetime.now(timezone.utc),
            reading=reading.model_copy(deep=True),
        )
        with self._lock:
            self._items[stored.record_id] = stored
            self._persist()
        return stored

    def _last_record(self, device_id: str, status: MotionStatus) -> HistoricalRecord:
        with self._lock:
            candidates = [
                item.reading
                for item in self._items.values()
                if item.reading.device_id == device_id and item.reading.status == status
            ]
        if not candidates:
            raise RecordNotFoundError(device_id, status)
        latest = max(candidates, key=lambda reading: reading.timestamp)
        return HistoricalRecord(device_id=device_id, status=status, timestamp=latest.timestamp)

    def _persist(self) -> None:
        if not self.persistence_path:
            return
        payload = {
            record_id: item.model_dump(mode="json") for record_id, item in self._items.items()
        }
        self.persistence_path.write_text(json.dumps(payload, indent=2, sort_keys=True))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "{}"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            logger.warning(
                "Ignoring unreadable motion table file",
                extra={"reason": str(self.persistence_path)},
            )
            data = {}

        for record_id, payload in data.items():
            self._items[record_id] = StoredReading.model_validate(payload)


@lru_cache
def build_default_table(
    name: Optional[str] = None,
    path: Optional[str] = None,
) -> MockMotionTable:
    """Shared table per name and path. ``path=""`` keeps the table in memory."""
    settings = get_settings()
    table_name = settings.table_name if name is None else name
    table_path = settings.table_persistence_path if path is None else path
    persistence = Path(table_path) if table_path else None
    return MockMotionTable(name=table_name, persistence_path=persistence)

"""Motion repository: sanitizes readings before they reach persistence."""

from __future__ import annotations

import logging
from typing import Protocol, Union

from models.readings import HistoricalRecord, MovingMotion, PersistedMotion, StaticMotion
from models.speed import PositiveSpeed
from services.validation import assert_is_moving, assert_not_zero_or_negative

logger = logging.getLogger(__name__)


class HistoryLookup(Protocol):
    async def get_last_moving_record(self, device_id: str) -> HistoricalRecord: ...

    async def get_last_static_record(self, device_id: str) -> HistoricalRecord: ...


class MotionPersistence(Protocol):
    async def create(self, record: MovingMotion) -> PersistedMotion: ...


class MotionStore(HistoryLookup, MotionPersistence, Protocol):
    pass


class MotionRepository:
    """Validates and copies readings on their way into the store."""

    def __init__(self, db_client: MotionStore) -> None:
        self.db_client = db_client

    async def create_moving_motion(
        self, motion: Union[StaticMotion, MovingMotion]
    ) -> PersistedMotion:
        """Persist a validated copy of ``motion``; ``motion`` itself is never modified."""
        sanitized = assert_is_moving(motion.model_copy(deep=True))
        assert_not_zero_or_negative(sanitized.speed)

        sanitized.speed = self.sanitize_speed(PositiveSpeed(sanitized.speed))
        logger.debug(
            "Persisting sanitized moving reading",
            extra={"device_id": sanitized.device_id, "speed": sanitized.speed},
        )
        return await self.db_client.create(sanitized)

    async def get_last_moving_record(self, device_id: str) -> HistoricalRecord:
        return await self.db_client.get_last_moving_record(device_id)

    async def get_last_static_record(self, device_id: str) -> HistoricalRecord:
        return await self.db_client.get_last_static_record(device_id)

    @staticmethod
    def sanitize_speed(speed: PositiveSpeed) -> PositiveSpeed:
        # Identity for now; unit conversion or clamping would go here.
        return speed

"""Sensor reading models shared across services."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator

MotionStatus = Literal["static", "moving"]


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC and normalize aware ones to UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class _MotionFields(BaseModel):
    sensor_id: str = Field(..., min_length=1)
    device_id: str = Field(..., min_length=1)
    timestamp: datetime
    sensitivity: str

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)


class StaticMotion(_MotionFields):
    """Motion sensor reporting that the device is not moving."""

    status: Literal["static"] = "static"


class MovingMotion(_MotionFields):
    """Motion sensor reporting movement.

    ``speed`` arrives unvalidated. It only becomes trustworthy after
    ``services.validation`` has checked it, at which point it is replaced
    by a ``PositiveSpeed``.
    """

    status: Literal["moving"] = "moving"
    speed: Any = None


MotionReading = Annotated[Union[StaticMotion, MovingMotion], Field(discriminator="status")]

_motion_adapter: TypeAdapter[Union[StaticMotion, MovingMotion]] = TypeAdapter(MotionReading)


def parse_motion(payload: Union[Mapping[str, Any], str, bytes]) -> Union[StaticMotion, MovingMotion]:
    """Validate a mapping or JSON document into the matching motion variant."""
    if isinstance(payload, (str, bytes)):
        return _motion_adapter.validate_json(payload)
    return _motion_adapter.validate_python(payload)


class MeterReading(BaseModel):
    """Power meter sample for a device."""

    sensor_id: str = Field(..., min_length=1)
    device_id: str = Field(..., min_length=1)
    power_consumption: float
    maximum_power_consumption: float


class HistoricalRecord(BaseModel):
    """Most recent stored reading of one state, used as a baseline."""

    device_id: str
    status: MotionStatus
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def _normalize_timestamp(cls, value: datetime) -> datetime:
        return as_utc(value)


class PersistedMotion(BaseModel):
    """A moving reading as returned by the persistence layer."""

    record_id: str
    stored_at: datetime
    reading: MovingMotion

"""Unit tests for the reading classifiers."""

from __future__ import annotations

from datetime import datetime, timezone

from models.readings import MeterReading, MovingMotion, StaticMotion
from services.classifier import is_power_consumption_high, is_static


def _meter(consumption: float, maximum: float) -> MeterReading:
    return MeterReading(
        sensor_id="meter-1",
        device_id="device-1",
        power_consumption=consumption,
        maximum_power_consumption=maximum,
    )


def test_is_static_distinguishes_variants() -> None:
    timestamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    static = StaticMotion(sensor_id="s", device_id="d", timestamp=timestamp, sensitivity="low")
    moving = MovingMotion(
        sensor_id="s", device_id="d", timestamp=timestamp, sensitivity="low", speed=3.0
    )

    assert is_static(static) is True
    assert is_static(moving) is False


def test_moving_reading_without_speed_is_still_not_static() -> None:
    moving = MovingMotion(
        sensor_id="s", device_id="d", timestamp=datetime(2024, 1, 1), sensitivity="high"
    )

    assert is_static(moving) is False


def test_power_consumption_above_maximum_is_high() -> None:
    assert is_power_consumption_high(_meter(100.0, 50.0)) is True


def test_power_consumption_at_or_below_maximum_is_not_high() -> None:
    assert is_power_consumption_high(_meter(50.0, 50.0)) is False
    assert is_power_consumption_high(_meter(40.0, 50.0)) is False
    assert is_power_consumption_high(_meter(-1.0, 0.0)) is False

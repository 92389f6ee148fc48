"""Unit tests for the mock motion table."""

from __future__ import annotations

import asyncio
import json
from datetime import datetime, timezone

import pytest

from datastore.mock_motion_table import MockMotionTable
from models.errors import RecordNotFoundError
from models.readings import MovingMotion, StaticMotion
from models.speed import PositiveSpeed


def _moving(hour: int, device_id: str = "device-1", speed: float = 2.0) -> MovingMotion:
    return MovingMotion(
        sensor_id="sensor-a",
        device_id=device_id,
        timestamp=datetime(2024, 1, 1, hour, tzinfo=timezone.utc),
        sensitivity="medium",
        speed=speed,
    )


def _static(hour: int, device_id: str = "device-1") -> StaticMotion:
    return StaticMotion(
        sensor_id="sensor-a",
        device_id=device_id,
        timestamp=datetime(2024, 1, 1, hour, tzinfo=timezone.utc),
        sensitivity="medium",
    )


def test_create_stores_and_returns_deep_copy() -> None:
    table = MockMotionTable(name="motion")
    original = _moving(3)

    persisted = asyncio.run(table.create(original))

    assert persisted.reading == original
    assert persisted.reading is not original
    assert persisted.record_id

    persisted.reading.speed = 99.0
    stored = table.scan()
    assert len(stored) == 1
    assert stored[0].speed == 2.0


def test_last_records_pick_latest_timestamp_per_state_and_device() -> None:
    table = MockMotionTable(name="motion")
    table.add_reading(_moving(1))
    table.add_reading(_moving(7))
    table.add_reading(_moving(4))
    table.add_reading(_static(5))
    table.add_reading(_static(2))
    table.add_reading(_moving(11, device_id="device-2"))

    last_moving = asyncio.run(table.get_last_moving_record("device-1"))
    last_static = asyncio.run(table.get_last_static_record("device-1"))

    assert last_moving.status == "moving"
    assert last_moving.timestamp.hour == 7
    assert last_static.status == "static"
    assert last_static.timestamp.hour == 5


def test_missing_history_raises_record_not_found() -> None:
    table = MockMotionTable(name="motion")
    table.add_reading(_static(1))

    with pytest.raises(RecordNotFoundError) as excinfo:
        asyncio.run(table.get_last_moving_record("device-1"))

    assert isinstance(excinfo.value, KeyError)
    assert excinfo.value.status == "moving"
    assert "device-1" in str(excinfo.value)


def test_persists_to_disk_and_reloads(tmp_path) -> None:
    path = tmp_path / "motion.json"
    table = MockMotionTable(name="motion", persistence_path=path)
    table.add_reading(_static(1))
    persisted = asyncio.run(table.create(_moving(2, speed=PositiveSpeed(4.5))))

    payload = json.loads(path.read_text())
    assert persisted.record_id in payload
    assert payload[persisted.record_id]["reading"]["status"] == "moving"
    assert payload[persisted.record_id]["reading"]["speed"] == 4.5

    reloaded = MockMotionTable(name="motion", persistence_path=path)
    readings = sorted(reloaded.scan(), key=lambda reading: reading.timestamp)
    assert [reading.status for reading in readings] == ["static", "moving"]
    assert isinstance(readings[0], StaticMotion)
    assert isinstance(readings[1], MovingMotion)
    assert readings[1].speed == 4.5


def test_unreadable_file_is_treated_as_empty(tmp_path) -> None:
    path = tmp_path / "motion.json"
    path.write_text("{not json")

    table = MockMotionTable(name="motion", persistence_path=path)

    assert table.scan() == []

"""Classification helpers for motion and meter readings."""

from __future__ import annotations

from typing import TypeGuard, Union

from models.readings import MeterReading, MovingMotion, StaticMotion


def is_power_consumption_high(meter: MeterReading) -> bool:
    return meter.power_consumption > meter.maximum_power_consumption


def is_static(motion: Union[StaticMotion, MovingMotion]) -> TypeGuard[StaticMotion]:
    """Narrow a motion reading to its static variant; False means moving."""
    return motion.status == "static"

"""Business rules evaluated against motion and meter readings."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel

from models.readings import MeterReading, MovingMotion, StaticMotion
from services.classifier import is_power_consumption_high, is_static
from services.repository import HistoryLookup
from services.validation import assert_is_moving
from settings import get_settings

logger = logging.getLogger(__name__)

_SECONDS_PER_HOUR = 3600.0


class AlertRule(str, Enum):
    sensitivity_too_low = "sensitivity_too_low"
    sensitivity_too_high = "sensitivity_too_high"
    high_power_consumption = "high_power_consumption"
    moving_consumption_cause = "moving_consumption_cause"


class Alert(BaseModel):
    """Warning raised by a rule; also emitted on the module logger."""

    rule: AlertRule
    device_id: str
    message: str
    sensor_id: Optional[str] = None
    speed: Any = None
    diff_hours: Optional[float] = None


def _emit(alert: Alert) -> Alert:
    logger.warning(
        alert.message,
        extra={
            "rule": alert.rule.value,
            "device_id": alert.device_id,
            "sensor_id": alert.sensor_id,
            "speed": alert.speed,
            "diff_hours": alert.diff_hours,
        },
    )
    return alert


async def sanity_check_sensitivity(
    motion: Union[StaticMotion, MovingMotion],
    history: HistoryLookup,
    threshold_hours: Optional[float] = None,
) -> Optional[Alert]:
    """Warn when a device has stayed in one state for longer than the threshold.

    A static reading is compared with the device's last moving record and a
    moving reading with its last static record. The comparison is strict
    and sign-sensitive: exactly ``threshold_hours`` or a baseline newer than
    the reading never fires. A missing baseline propagates the lookup error.
    """
    threshold = get_settings().sensitivity_threshold_hours if threshold_hours is None else threshold_hours

    if is_static(motion):
        baseline = await history.get_last_moving_record(motion.device_id)
        rule = AlertRule.sensitivity_too_low
        message = f"Sensitivity level is too low for device {motion.device_id}!"
    else:
        baseline = await history.get_last_static_record(motion.device_id)
        rule = AlertRule.sensitivity_too_high
        message = f"Sensitivity level is too high for device {motion.device_id}!"

    diff_hours = (motion.timestamp - baseline.timestamp).total_seconds() / _SECONDS_PER_HOUR
    if diff_hours <= threshold:
        return None

    return _emit(
        Alert(
            rule=rule,
            device_id=motion.device_id,
            sensor_id=motion.sensor_id,
            diff_hours=diff_hours,
            message=message,
        )
    )


def notify_me_on_moving_high_consumption_device(
    motion: Union[StaticMotion, MovingMotion],
    meter: MeterReading,
) -> list[Alert]:
    """Attribute high power draw to movement.

    Nothing is checked unless consumption is high. When it is, the motion
    reading must be moving; validation errors propagate to the caller.
    """
    if not is_power_consumption_high(meter):
        return []

    moving = assert_is_moving(motion)

    return [
        _emit(
            Alert(
                rule=AlertRule.high_power_consumption,
                device_id=moving.device_id,
                message=f"Current power consumption for device {moving.device_id} is high!",
            )
        ),
        _emit(
            Alert(
                rule=AlertRule.moving_consumption_cause,
                device_id=moving.device_id,
                sensor_id=moving.sensor_id,
                speed=moving.speed,
                message=(
                    "This could be caused because it is moving according to sensor "
                    f"{moving.sensor_id} with the speed of {moving.speed}"
                ),
            )
        ),
    ]

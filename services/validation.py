"""Validation of untrusted motion readings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union, cast

from models.errors import (
    ERRORS_BY_KIND,
    MotionValidationError,
    NotMovingError,
    ValidationErrorKind,
    WrongStateError,
)
from models.readings import MovingMotion, StaticMotion
from models.speed import PositiveSpeed, assert_not_zero_or_negative

__all__ = [
    "ValidationResult",
    "assert_is_moving",
    "assert_not_zero_or_negative",
    "validate_moving",
]


def assert_is_moving(motion: Union[StaticMotion, MovingMotion]) -> MovingMotion:
    """Return ``motion`` narrowed to ``MovingMotion`` if it has a truthy speed.

    Static readings are rejected with ``WrongStateError`` rather than
    passing through unchecked.
    """
    if motion.status != "moving":
        raise WrongStateError(
            f"Expected a moving reading for device {motion.device_id!r}, got {motion.status!r}."
        )
    moving = cast(MovingMotion, motion)
    if not moving.speed:
        raise NotMovingError(
            f"Reading from sensor {moving.sensor_id!r} is tagged moving but has no speed."
        )
    return moving


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Either a narrowed moving reading or the reason validation failed."""

    value: Optional[MovingMotion] = None
    kind: Optional[ValidationErrorKind] = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.kind is None

    def unwrap(self) -> MovingMotion:
        """Return the validated reading or raise the matching error."""
        if self.kind is not None:
            raise ERRORS_BY_KIND[self.kind](self.detail)
        return cast(MovingMotion, self.value)


def validate_moving(motion: Union[StaticMotion, MovingMotion]) -> ValidationResult:
    """Check a reading without raising.

    On success the returned value is a copy whose ``speed`` is a
    ``PositiveSpeed``; the input is left untouched.
    """
    try:
        moving = assert_is_moving(motion)
        speed = PositiveSpeed(moving.speed)
    except MotionValidationError as exc:
        return ValidationResult(kind=exc.kind, detail=exc.detail)
    return ValidationResult(value=moving.model_copy(deep=True, update={"speed": speed}))

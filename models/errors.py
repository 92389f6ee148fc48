"""Error taxonomy for reading validation and history lookups."""

from __future__ import annotations

from enum import Enum


class ValidationErrorKind(str, Enum):
    """Distinguishable reasons a reading fails validation."""

    not_moving = "not_moving"
    wrong_state = "wrong_state"
    unknown_data_type = "unknown_data_type"
    not_positive = "not_positive"


class MotionValidationError(ValueError):
    """Base class for validation failures carrying a ``kind``."""

    kind: ValidationErrorKind

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotMovingError(MotionValidationError):
    """Reading is tagged moving but has no usable speed."""

    kind = ValidationErrorKind.not_moving


class WrongStateError(MotionValidationError):
    """A moving reading was required but a static one was supplied."""

    kind = ValidationErrorKind.wrong_state


class UnknownDataTypeError(MotionValidationError):
    """Speed is not a finite real number."""

    kind = ValidationErrorKind.unknown_data_type


class NotPositiveError(MotionValidationError):
    """Speed is a finite number but zero or negative."""

    kind = ValidationErrorKind.not_positive


ERRORS_BY_KIND: dict[ValidationErrorKind, type[MotionValidationError]] = {
    ValidationErrorKind.not_moving: NotMovingError,
    ValidationErrorKind.wrong_state: WrongStateError,
    ValidationErrorKind.unknown_data_type: UnknownDataTypeError,
    ValidationErrorKind.not_positive: NotPositiveError,
}


class RecordNotFoundError(KeyError):
    """No historical record of the requested state exists for a device."""

    def __init__(self, device_id: str, status: str) -> None:
        super().__init__(f"No {status} record found for device {device_id!r}.")
        self.device_id = device_id
        self.status = status

    def __str__(self) -> str:
        return str(self.args[0])

"""Positive speed value type."""

from __future__ import annotations

import math
from numbers import Real
from typing import Any

from models.errors import NotPositiveError, UnknownDataTypeError


def is_finite_number(value: Any) -> bool:
    """Return True for real, finite numbers. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    return math.isfinite(value)


def assert_not_zero_or_negative(value: Any) -> None:
    """Raise unless ``value`` is a finite number strictly greater than zero.

    The type check runs first so callers can tell a malformed speed
    (``UnknownDataTypeError``) apart from an out-of-range one
    (``NotPositiveError``).
    """
    if not is_finite_number(value):
        raise UnknownDataTypeError(f"Expected a finite number, got {value!r}.")
    if value <= 0:
        raise NotPositiveError(f"Expected a value greater than zero, got {value!r}.")


class PositiveSpeed(float):
    """A float that is known to be finite and greater than zero.

    Construction is the only way to obtain one and it always validates,
    so downstream code never needs to re-check.
    """

    __slots__ = ()

    def __new__(cls, value: Any) -> "PositiveSpeed":
        if isinstance(value, PositiveSpeed):
            return value
        assert_not_zero_or_negative(value)
        return super().__new__(cls, value)

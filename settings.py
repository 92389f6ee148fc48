from __future__ import annotations

import math
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_TABLE_NAME_ENV = "MOTION_TABLE_NAME"
_TABLE_PATH_ENV = "MOTION_TABLE_PERSISTENCE_PATH"
_THRESHOLD_ENV = "SENSITIVITY_THRESHOLD_HOURS"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    table_name: str
    table_persistence_path: Optional[str]
    sensitivity_threshold_hours: float
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_threshold_hours(default: float) -> float:
    value = os.getenv(_THRESHOLD_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    if not math.isfinite(parsed):
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        table_name=_read_str_env(_TABLE_NAME_ENV, "motion_readings"),
        table_persistence_path=_read_optional_env(_TABLE_PATH_ENV, "./tmp/motion_db.json"),
        sensitivity_threshold_hours=_read_threshold_hours(12.0),
        log_level=_read_log_level("INFO"),
    )

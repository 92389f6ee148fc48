from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from settings import get_settings


@dataclass(frozen=True)
class CLIConfig:
    table_name: str
    table_path: Optional[Path]
    threshold_hours: float


def load_config(
    table_path: Optional[Path] = None,
    threshold_hours: Optional[float] = None,
    in_memory: bool = False,
) -> CLIConfig:
    """Merge command line overrides on top of environment settings."""
    settings = get_settings()
    if in_memory:
        path = None
    elif table_path is not None:
        path = table_path
    else:
        path = Path(settings.table_persistence_path) if settings.table_persistence_path else None
    if threshold_hours is None or threshold_hours <= 0:
        threshold_hours = settings.sensitivity_threshold_hours
    return CLIConfig(
        table_name=settings.table_name,
        table_path=path,
        threshold_hours=threshold_hours,
    )

from __future__ import annotations

from typing import Iterable

from datastore.mock_motion_table import build_default_table
from settings import get_settings


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    table_path = tmp_path / "motion.json"

    monkeypatch.setenv("MOTION_TABLE_NAME", "custom-table")
    monkeypatch.setenv("MOTION_TABLE_PERSISTENCE_PATH", str(table_path))
    monkeypatch.setenv("SENSITIVITY_THRESHOLD_HOURS", "6.5")
    monkeypatch.setenv("LOG_LEVEL", " debug ")

    caches = (get_settings, build_default_table)
    _clear_caches(caches)

    try:
        settings = get_settings()
        table = build_default_table()

        assert table.name == "custom-table"
        assert table.persistence_path == table_path
        assert settings.sensitivity_threshold_hours == 6.5
        assert settings.log_level == "DEBUG"
    finally:
        _clear_caches(caches)


def test_invalid_threshold_falls_back_to_default(monkeypatch) -> None:
    get_settings.cache_clear()
    try:
        for raw in ("not-a-number", "-3", "0", "nan", ""):
            monkeypatch.setenv("SENSITIVITY_THRESHOLD_HOURS", raw)
            get_settings.cache_clear()
            assert get_settings().sensitivity_threshold_hours == 12.0
    finally:
        get_settings.cache_clear()


def test_blank_persistence_path_means_in_memory(monkeypatch) -> None:
    monkeypatch.setenv("MOTION_TABLE_PERSISTENCE_PATH", "   ")
    _clear_caches((get_settings, build_default_table))
    try:
        assert get_settings().table_persistence_path is None
        assert build_default_table().persistence_path is None
    finally:
        _clear_caches((get_settings, build_default_table))

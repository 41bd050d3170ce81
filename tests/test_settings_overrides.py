from __future__ import annotations

from typing import Iterable

from services.readings_store import build_default_readings_store
from settings import get_settings
from storage.kv_store import build_default_store


def _clear_caches(caches: Iterable) -> None:
    for cache in caches:
        cache.cache_clear()


def test_environment_overrides_apply(monkeypatch, tmp_path) -> None:
    storage_root = tmp_path / "kv"

    monkeypatch.setenv("READINGS_STORAGE_ROOT", str(storage_root))
    monkeypatch.setenv("READINGS_KEY_PREFIX", "meter_")
    monkeypatch.setenv("READINGS_HOUSES", " cottage , ,flat,cottage")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    caches = (get_settings, build_default_store, build_default_readings_store)
    _clear_caches(caches)

    try:
        settings = get_settings()
        store = build_default_readings_store("cottage")

        assert settings.houses == ("cottage", "flat")
        assert settings.log_level == "DEBUG"
        assert build_default_store().root_path == storage_root
        assert store.repository.key == "meter_cottage"
    finally:
        _clear_caches(caches)


def test_blank_storage_root_means_in_memory(monkeypatch) -> None:
    monkeypatch.setenv("READINGS_STORAGE_ROOT", "  ")
    monkeypatch.setenv("READINGS_HOUSES", "")
    _clear_caches((get_settings, build_default_store))

    try:
        assert get_settings().houses == ("house1", "house2")
        assert build_default_store().root_path is None
    finally:
        _clear_caches((get_settings, build_default_store))

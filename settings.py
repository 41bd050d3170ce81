from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple


_STORAGE_ROOT_ENV = "READINGS_STORAGE_ROOT"
_KEY_PREFIX_ENV = "READINGS_KEY_PREFIX"
_HOUSES_ENV = "READINGS_HOUSES"
_LOG_LEVEL_ENV = "LOG_LEVEL"

DEFAULT_HOUSES: Tuple[str, ...] = ("house1", "house2")


@dataclass(frozen=True)
class Settings:
    storage_root_path: Optional[str]
    key_prefix: str
    houses: Tuple[str, ...]
    log_level: str

    def storage_key(self, house_id: str) -> str:
        return f"{self.key_prefix}{house_id}"


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


def _read_houses(default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(_HOUSES_ENV)
    if value is None:
        return default
    houses: list[str] = []
    for part in value.split(","):
        candidate = part.strip()
        if candidate and candidate not in houses:
            houses.append(candidate)
    return tuple(houses) or default


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
        storage_root_path=_read_optional_env(_STORAGE_ROOT_ENV, "./tmp/readings"),
        key_prefix=_read_str_env(_KEY_PREFIX_ENV, "electricityReadings_"),
        houses=_read_houses(DEFAULT_HOUSES),
        log_level=_read_log_level("INFO"),
    )

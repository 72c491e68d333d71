from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


_SAMPLE_HOURS_ENV = "RIVER_DSS_SAMPLE_HOURS"
_RANDOM_SEED_ENV = "RIVER_DSS_RANDOM_SEED"
_LOCATIONS_PATH_ENV = "RIVER_DSS_LOCATIONS_PATH"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    sample_hours: int
    random_seed: Optional[int]
    locations_path: Optional[str]
    log_level: str


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_sample_hours(default: int) -> int:
    value = os.getenv(_SAMPLE_HOURS_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_seed() -> Optional[int]:
    candidate = _read_optional_env(_RANDOM_SEED_ENV, None)
    if candidate is None:
        return None
    try:
        return int(candidate)
    except ValueError:
        return None


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
        sample_hours=_read_sample_hours(24),
        random_seed=_read_seed(),
        locations_path=_read_optional_env(_LOCATIONS_PATH_ENV, None),
        log_level=_read_log_level("INFO"),
    )

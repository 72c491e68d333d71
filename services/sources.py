"""Sample series providers consumed by the dashboard service."""

from __future__ import annotations

import math
import random
from functools import lru_cache
from threading import Lock
from typing import Dict, Iterable, Mapping, Optional, Protocol, Tuple

from models.records import WaterSample
from settings import get_settings

SampleSeries = Tuple[WaterSample, ...]


class SampleSource(Protocol):
    def fetch(self, location_id: str) -> SampleSeries:
        ...


class StaticSampleSource:
    """Serves series supplied up front; unknown locations have no data."""

    def __init__(self, series: Optional[Mapping[str, Iterable[WaterSample]]] = None) -> None:
        self._series: Dict[str, SampleSeries] = {
            location_id: tuple(samples) for location_id, samples in (series or {}).items()
        }

    def fetch(self, location_id: str) -> SampleSeries:
        return self._series.get(location_id, ())


class MockSampleSource:
    """Generates a synthetic hourly series per location.

    Turbidity and BOD are uniform noise, pH and dissolved oxygen follow slow
    sinusoids around neutral and healthy levels. A location's series is
    generated on first request and served unchanged until :meth:`reset`.
    With a seed, each location draws from its own generator keyed on the seed
    and the location id, so its series does not depend on request order.
    """

    def __init__(self, hours: int = 24, seed: Optional[int] = None) -> None:
        if hours <= 0:
            raise ValueError("hours must be positive.")
        self.hours = hours
        self._seed = seed
        self._cache: Dict[str, SampleSeries] = {}
        self._lock = Lock()

    def fetch(self, location_id: str) -> SampleSeries:
        with self._lock:
            series = self._cache.get(location_id)
            if series is None:
                series = self._generate(self._random_for(location_id))
                self._cache[location_id] = series
            return series

    def reset(self) -> None:
        with self._lock:
            self._cache.clear()

    def _random_for(self, location_id: str) -> random.Random:
        if self._seed is None:
            return random.Random()
        return random.Random(f"{self._seed}:{location_id}")

    def _generate(self, rng: random.Random) -> SampleSeries:
        return tuple(
            WaterSample(
                hour=hour % 24,
                turbidity=rng.random() * 50,
                ph=7 + math.sin(hour / 3) / 6,
                dissolved_oxygen=6 + math.cos(hour / 4) / 4,
                bod=rng.random() * 5,
            )
            for hour in range(self.hours)
        )


@lru_cache
def build_default_source() -> MockSampleSource:
    settings = get_settings()
    return MockSampleSource(hours=settings.sample_hours, seed=settings.random_seed)

from __future__ import annotations
import json
import logging
from functools import lru_cache
from pathlib import Path
from threading import Lock
from typing import Dict, Iterable, Optional

from models.records import Location, LocationStatus
from settings import get_settings

logger = logging.getLogger(__name__)

DEFAULT_LOCATIONS = (
    Location("loc-01", "Kanpur - Ghat", LocationStatus.good),
    Location("loc-02", "Varanasi - Dashashwamedh", LocationStatus.moderate),
    Location("loc-03", "Patna - Gandhi Ghat", LocationStatus.poor),
    Location("loc-04", "Kham River - Chh. Sambhajinagar", LocationStatus.moderate),
    Location("loc-05", "Godavari River", LocationStatus.good),
    Location("loc-06", "Dnyanganga River - Buldhana", LocationStatus.moderate),
    Location("loc-07", "Ganga River", LocationStatus.moderate),
)


class LocationCatalog:

    def __init__(
        self,
        locations: Optional[Iterable[Location]] = None,
        persistence_path: Optional[Path] = None,
    ) -> None:
        self.persistence_path = persistence_path
        self._items: Dict[str, Location] = {}
        self._lock = Lock()

        loaded = self._load_from_disk() if persistence_path else None
        if loaded is None:
            loaded = list(locations) if locations is not None else list(DEFAULT_LOCATIONS)
        for location in loaded:
            self._items[location.location_id] = location

    def put(self, location: Location) -> None:
        with self._lock:
            self._items[location.location_id] = location

    def get(self, location_id: str) -> Optional[Location]:
        with self._lock:
            return self._items.get(location_id)

    def scan(self) -> list[Location]:
        """Return all locations in registration order."""

        with self._lock:
            return list(self._items.values())

    def _load_from_disk(self) -> Optional[list[Location]]:
        if not self.persistence_path or not self.persistence_path.exists():
            return None

        try:
            data = json.loads(self.persistence_path.read_text() or "[]")
            return [
                Location(
                    location_id=str(entry["location_id"]),
                    name=str(entry["name"]),
                    status=LocationStatus(entry["status"]),
                )
                for entry in data
            ]
        except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as exc:
            logger.warning(
                "Ignoring unreadable location catalog",
                extra={"object_key": str(self.persistence_path), "reason": str(exc)},
            )
            return None


@lru_cache
def build_default_catalog(path: Optional[str] = None) -> LocationCatalog:
    settings = get_settings()
    catalog_path = settings.locations_path if path is None else path
    persistence = Path(catalog_path) if catalog_path else None
    return LocationCatalog(persistence_path=persistence)

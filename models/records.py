"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class LocationStatus(str, Enum):
    """Qualitative condition tag assigned to a monitoring location."""

    good = "good"
    moderate = "moderate"
    poor = "poor"


@dataclass(frozen=True, slots=True)
class WaterSample:
    """A single hourly water-quality measurement."""

    hour: int
    turbidity: float
    ph: float
    dissolved_oxygen: float
    bod: float


@dataclass(frozen=True, slots=True)
class Location:
    location_id: str
    name: str
    status: LocationStatus


@dataclass(frozen=True, slots=True)
class TreatmentRecommendation:
    """Chemical doses in kg per 1000 m3 of water, derived from the latest sample."""

    coagulant_kg: float
    flocculant_kg: float
    ph_adjuster_kg: float
    activated_carbon_kg: float

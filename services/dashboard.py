"""Per-location advisory views assembled from the catalog and a sample source."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import List, Sequence

from app.schemas import (
    EvaluationResult,
    LocationDetail,
    LocationSummary,
    Recommendation,
    SamplePayload,
    TreatmentPlan,
)
from datastore.location_catalog import LocationCatalog, build_default_catalog
from models.records import WaterSample
from services.advisory import (
    TREATMENT_PROCESS,
    TREATMENT_STRATEGIES,
    WATER_PARAMETERS,
    breached_parameters,
    is_alerting,
    recommend,
)
from services.sources import SampleSource, build_default_source

logger = logging.getLogger(__name__)


class DashboardService:
    """Read-only facade used by the API, the web UI and the CLI."""

    def __init__(self, catalog: LocationCatalog, source: SampleSource) -> None:
        self.catalog = catalog
        self.source = source

    def overview(self) -> List[LocationSummary]:
        summaries: List[LocationSummary] = []
        for location in self.catalog.scan():
            samples = self.source.fetch(location.location_id)
            summaries.append(LocationSummary.from_location(location, is_alerting(samples)))
        return summaries

    def details(self) -> List[LocationDetail]:
        """Detail views for every catalog location, one source fetch each."""
        return [self.detail(location.location_id) for location in self.catalog.scan()]

    def detail(self, location_id: str) -> LocationDetail:
        location = self.catalog.get(location_id)
        if location is None:
            raise KeyError(f"Location {location_id!r} not found.")

        samples = self.source.fetch(location_id)
        alerting = is_alerting(samples)
        latest_breaches = breached_parameters(samples[-1]) if samples else []

        treatment = None
        if alerting:
            recommendation = recommend(samples)
            if recommendation is not None:
                treatment = TreatmentPlan(
                    recommendation=Recommendation.from_domain(recommendation),
                    strategies=list(TREATMENT_STRATEGIES),
                    process=list(TREATMENT_PROCESS),
                )

        logger.debug(
            "Evaluated location",
            extra={
                "location_id": location_id,
                "sample_count": len(samples),
                "alerting": alerting,
                "breaches": ",".join(latest_breaches) or None,
            },
        )

        return LocationDetail(
            location_id=location.location_id,
            name=location.name,
            status=location.status,
            alerting=alerting,
            samples=[SamplePayload.from_sample(sample) for sample in samples],
            latest_breaches=latest_breaches,
            treatment=treatment,
        )

    def evaluate(self, samples: Sequence[WaterSample]) -> EvaluationResult:
        """Evaluate an ad-hoc series supplied by the caller."""
        snapshot = tuple(samples)
        breached = set()
        for sample in snapshot:
            breached.update(breached_parameters(sample))

        recommendation = recommend(snapshot)
        return EvaluationResult(
            alerting=is_alerting(snapshot),
            recommendation=(
                Recommendation.from_domain(recommendation) if recommendation is not None else None
            ),
            breached_parameters=[name for name in WATER_PARAMETERS if name in breached],
        )


@lru_cache
def build_default_dashboard() -> DashboardService:
    """Factory that wires the dashboard with the default catalog and mock source."""
    return DashboardService(catalog=build_default_catalog(), source=build_default_source())

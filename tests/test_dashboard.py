from __future__ import annotations

import logging

import pytest

from datastore.location_catalog import LocationCatalog
from models.records import Location, LocationStatus, WaterSample
from services.dashboard import DashboardService
from services.sources import StaticSampleSource


def _sample(hour: int, turbidity: float = 10.0, ph: float = 7.0, do: float = 6.0, bod: float = 1.0) -> WaterSample:
    return WaterSample(hour=hour, turbidity=turbidity, ph=ph, dissolved_oxygen=do, bod=bod)


@pytest.fixture()
def dashboard() -> DashboardService:
    catalog = LocationCatalog(
        locations=[
            Location("clean", "Clean Reach", LocationStatus.good),
            Location("dirty", "Dirty Reach", LocationStatus.poor),
            Location("silent", "Offline Gauge", LocationStatus.moderate),
        ]
    )
    source = StaticSampleSource(
        {
            "clean": [_sample(0), _sample(1)],
            "dirty": [_sample(0, turbidity=45.0), _sample(1, ph=6.0, do=3.0, bod=4.0)],
        }
    )
    return DashboardService(catalog=catalog, source=source)


def test_overview_flags_alerting_locations(dashboard: DashboardService) -> None:
    summaries = {summary.location_id: summary for summary in dashboard.overview()}

    assert summaries["clean"].alerting is False
    assert summaries["dirty"].alerting is True
    assert summaries["silent"].alerting is False
    assert summaries["dirty"].status is LocationStatus.poor


def test_detail_includes_treatment_when_alerting(dashboard: DashboardService) -> None:
    detail = dashboard.detail("dirty")

    assert detail.alerting is True
    assert len(detail.samples) == 2
    assert detail.latest_breaches == ["ph", "dissolved_oxygen", "bod"]
    assert detail.treatment is not None
    recommendation = detail.treatment.recommendation
    assert recommendation.coagulant_kg == 20.0
    assert recommendation.flocculant_kg == pytest.approx(1.0)
    assert recommendation.ph_adjuster_kg == 8.0
    assert recommendation.activated_carbon_kg == 17.0
    assert detail.treatment.process[0] == "Coagulants"
    assert detail.treatment.strategies


def test_detail_omits_treatment_when_within_limits(dashboard: DashboardService) -> None:
    detail = dashboard.detail("clean")

    assert detail.alerting is False
    assert detail.treatment is None
    assert detail.latest_breaches == []


def test_detail_without_samples_degrades_gracefully(dashboard: DashboardService) -> None:
    detail = dashboard.detail("silent")

    assert detail.samples == []
    assert detail.alerting is False
    assert detail.treatment is None


def test_detail_unknown_location_raises(dashboard: DashboardService) -> None:
    with pytest.raises(KeyError):
        dashboard.detail("nowhere")


def test_detail_logs_evaluation_context(dashboard: DashboardService, caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="services.dashboard"):
        dashboard.detail("dirty")

    records = [r for r in caplog.records if r.name == "services.dashboard"]
    assert records
    assert getattr(records[0], "location_id", None) == "dirty"
    assert getattr(records[0], "alerting", None) is True
    assert getattr(records[0], "sample_count", None) == 2


def test_evaluate_ad_hoc_series(dashboard: DashboardService) -> None:
    result = dashboard.evaluate([_sample(0, turbidity=45.0), _sample(1, bod=3.5)])

    assert result.alerting is True
    assert result.breached_parameters == ["turbidity", "bod"]
    assert result.recommendation is not None
    assert result.recommendation.coagulant_kg == 20.0
    assert result.recommendation.activated_carbon_kg == 17.0


def test_evaluate_empty_series(dashboard: DashboardService) -> None:
    result = dashboard.evaluate([])

    assert result.alerting is False
    assert result.recommendation is None
    assert result.breached_parameters == []

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from app.web import sparkline_points
from datastore.location_catalog import LocationCatalog
from models.records import Location, LocationStatus, WaterSample
from services.dashboard import DashboardService, build_default_dashboard
from services.sources import StaticSampleSource


def _sample(hour: int, turbidity: float = 10.0, ph: float = 7.0, do: float = 6.0, bod: float = 1.0) -> WaterSample:
    return WaterSample(hour=hour, turbidity=turbidity, ph=ph, dissolved_oxygen=do, bod=bod)


@pytest.fixture
def api_client(monkeypatch) -> Iterator[TestClient]:
    dashboard = DashboardService(
        catalog=LocationCatalog(
            locations=[
                Location("loc-01", "Kanpur - Ghat", LocationStatus.good),
                Location("loc-03", "Patna - Gandhi Ghat", LocationStatus.poor),
            ]
        ),
        source=StaticSampleSource(
            {
                "loc-01": [_sample(0), _sample(1)],
                "loc-03": [_sample(0), _sample(1, turbidity=45.0, bod=4.0)],
            }
        ),
    )

    monkeypatch.setattr("app.api.build_default_dashboard", lambda: dashboard)
    monkeypatch.setattr("app.web.build_default_dashboard", lambda: dashboard)

    app = create_app()
    with TestClient(app) as client:
        yield client


def test_lifespan_clears_cached_dashboard() -> None:
    app = create_app()

    with TestClient(app):
        dashboard_during = build_default_dashboard()

    dashboard_after = build_default_dashboard()
    try:
        assert dashboard_after is not dashboard_during
    finally:
        build_default_dashboard.cache_clear()


def test_health_and_root(api_client: TestClient) -> None:
    assert api_client.get("/health").json() == {"status": "ok"}
    assert api_client.get("/").json()["status"] == "ok"


def test_list_locations(api_client: TestClient) -> None:
    response = api_client.get("/locations")

    assert response.status_code == 200
    assert response.json() == [
        {"location_id": "loc-01", "name": "Kanpur - Ghat", "status": "good", "alerting": False},
        {"location_id": "loc-03", "name": "Patna - Gandhi Ghat", "status": "poor", "alerting": True},
    ]


def test_location_detail_with_treatment(api_client: TestClient) -> None:
    response = api_client.get("/locations/loc-03")

    assert response.status_code == 200
    payload = response.json()
    assert payload["alerting"] is True
    assert len(payload["samples"]) == 2
    assert payload["latest_breaches"] == ["turbidity", "bod"]
    assert payload["treatment"]["recommendation"] == {
        "coagulant_kg": 25.0,
        "flocculant_kg": 0.8,
        "ph_adjuster_kg": 7.0,
        "activated_carbon_kg": 17.0,
    }


def test_location_detail_without_alert_has_no_treatment(api_client: TestClient) -> None:
    payload = api_client.get("/locations/loc-01").json()

    assert payload["alerting"] is False
    assert payload["treatment"] is None


def test_get_missing_location_returns_not_found(api_client: TestClient) -> None:
    response = api_client.get("/locations/loc-99")

    assert response.status_code == 404
    assert "loc-99" in response.json()["detail"]


def test_evaluate_samples(api_client: TestClient) -> None:
    response = api_client.post(
        "/evaluate",
        json={
            "samples": [
                {"hour": 0, "turbidity": 45, "ph": 7, "dissolved_oxygen": 6, "bod": 1},
            ]
        },
    )

    assert response.status_code == 200
    assert response.json() == {
        "alerting": True,
        "recommendation": {
            "coagulant_kg": 25.0,
            "flocculant_kg": 0.8,
            "ph_adjuster_kg": 7.0,
            "activated_carbon_kg": 12.0,
        },
        "breached_parameters": ["turbidity"],
    }


def test_evaluate_empty_series(api_client: TestClient) -> None:
    response = api_client.post("/evaluate", json={"samples": []})

    assert response.status_code == 200
    assert response.json() == {"alerting": False, "recommendation": None, "breached_parameters": []}


def test_evaluate_rejects_out_of_range_hour(api_client: TestClient) -> None:
    response = api_client.post(
        "/evaluate",
        json={"samples": [{"hour": 24, "turbidity": 1, "ph": 7, "dissolved_oxygen": 6, "bod": 1}]},
    )

    assert response.status_code == 422


def test_ui_index_renders_alert_banner(api_client: TestClient) -> None:
    response = api_client.get("/ui")

    assert response.status_code == 200
    assert "Patna - Gandhi Ghat" in response.text
    assert response.text.count("Water treatment required!") == 1


def test_ui_detail_renders_treatment(api_client: TestClient) -> None:
    response = api_client.get("/ui/locations/loc-03")

    assert response.status_code == 200
    assert "Recommended Treatment" in response.text
    assert "Coagulants (Alum/Ferric Chloride): 25.0 kg" in response.text


def test_ui_detail_missing_location(api_client: TestClient) -> None:
    assert api_client.get("/ui/locations/loc-99").status_code == 404


def test_sparkline_points_scale_into_box() -> None:
    assert sparkline_points([]) == ""
    assert sparkline_points([1.0, 3.0], width=10, height=10) == "0.0,10.0 10.0,0.0"
    assert sparkline_points([2.0], width=10, height=10) == "0.0,10.0"


def test_ui_index_fetches_each_series_once(monkeypatch) -> None:
    class CountingSource:
        """Alternates between an alerting and a clean series on every fetch."""

        def __init__(self) -> None:
            self.calls: dict[str, int] = {}

        def fetch(self, location_id: str):
            count = self.calls.get(location_id, 0)
            self.calls[location_id] = count + 1
            if count % 2 == 0:
                return (_sample(0, turbidity=45.0),)
            return (_sample(0),)

    source = CountingSource()
    dashboard = DashboardService(
        catalog=LocationCatalog(locations=[Location("loc-01", "Kanpur - Ghat", LocationStatus.good)]),
        source=source,
    )
    monkeypatch.setattr("app.web.build_default_dashboard", lambda: dashboard)

    with TestClient(create_app()) as client:
        response = client.get("/ui")

    assert response.status_code == 200
    assert source.calls == {"loc-01": 1}
    assert "Water treatment required!" in response.text

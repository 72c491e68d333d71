from __future__ import annotations

from typing import Any, Dict, List, Sequence

import httpx
import typer

from cli.config import CLIConfig
from models.records import WaterSample


class ApiClient:
    """Minimal HTTP client for the advisory service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        self._client = httpx.Client(base_url=config.base_url, timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def list_locations(self) -> List[Dict[str, Any]]:
        try:
            response = self._client.get("/locations")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    def get_location(self, location_id: str) -> Dict[str, Any]:
        try:
            response = self._client.get(f"/locations/{location_id}")
            if response.status_code == 404:
                raise typer.BadParameter(f"Location {location_id} was not found.")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    def evaluate(self, samples: Sequence[WaterSample]) -> Dict[str, Any]:
        body = {
            "samples": [
                {
                    "hour": sample.hour,
                    "turbidity": sample.turbidity,
                    "ph": sample.ph,
                    "dissolved_oxygen": sample.dissolved_oxygen,
                    "bod": sample.bod,
                }
                for sample in samples
            ]
        }
        try:
            response = self._client.post("/evaluate", json=body)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> None:
        detail: Any = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except ValueError:
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

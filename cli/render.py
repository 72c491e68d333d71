from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

import typer

from services.advisory import CHEMICAL_LABELS


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _alert_label(alerting: Any) -> str:
    return "ALERT" if alerting else "ok"


def render_locations(payload: List[Dict[str, Any]]) -> None:
    echo_heading("Locations")
    if not payload:
        typer.echo("No locations configured.")
        return
    for item in payload:
        line = (
            f"  {item.get('location_id')}  {item.get('name')}  "
            f"[{item.get('status')}]  {_alert_label(item.get('alerting'))}"
        )
        if item.get("alerting"):
            typer.secho(line, fg=typer.colors.RED)
        else:
            typer.echo(line)


def render_recommendation(recommendation: Optional[Dict[str, Any]]) -> None:
    echo_heading("Recommended treatment (per 1000 m3)")
    if not recommendation:
        typer.echo("No recommendation available.")
        return
    for key, label in CHEMICAL_LABELS.items():
        typer.echo(f"  - {label}: {recommendation.get(key)} kg")


def render_location(payload: Dict[str, Any]) -> None:
    echo_heading("Location")
    echo_key_values(
        [
            ("location_id", payload.get("location_id")),
            ("name", payload.get("name")),
            ("status", payload.get("status")),
            ("alerting", payload.get("alerting")),
            ("samples", len(payload.get("samples") or [])),
        ]
    )
    breaches = payload.get("latest_breaches") or []
    if breaches:
        typer.echo(f"latest_breaches: {', '.join(breaches)}")

    typer.echo()
    treatment = payload.get("treatment")
    if not treatment:
        typer.echo("No treatment required.")
        return
    render_recommendation(treatment.get("recommendation"))
    process = treatment.get("process") or []
    if process:
        typer.echo(f"Process: {' -> '.join(process)}")


def render_evaluation(payload: Dict[str, Any]) -> None:
    echo_heading("Evaluation")
    echo_key_values(
        [
            ("alerting", payload.get("alerting")),
            ("breached_parameters", ", ".join(payload.get("breached_parameters") or []) or "none"),
        ]
    )
    typer.echo()
    render_recommendation(payload.get("recommendation"))

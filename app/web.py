from __future__ import annotations

from pathlib import Path
from typing import Sequence

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from services.advisory import CHEMICAL_LABELS
from services.dashboard import DashboardService, build_default_dashboard


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

_SPARK_WIDTH = 240
_SPARK_HEIGHT = 60


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


def sparkline_points(
    values: Sequence[float], width: int = _SPARK_WIDTH, height: int = _SPARK_HEIGHT
) -> str:
    """Scale ``values`` into an SVG polyline ``points`` attribute."""
    if not values:
        return ""
    low, high = min(values), max(values)
    span = high - low or 1.0
    step = width / (len(values) - 1) if len(values) > 1 else 0.0
    points = []
    for index, value in enumerate(values):
        x = index * step
        y = height - (value - low) / span * height
        points.append(f"{x:.1f},{y:.1f}")
    return " ".join(points)


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    request: Request,
    dashboard: DashboardService = Depends(get_dashboard),
) -> HTMLResponse:
    cards = [
        {
            "summary": detail,
            "turbidity_points": sparkline_points([s.turbidity for s in detail.samples]),
        }
        for detail in dashboard.details()
    ]
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "cards": cards,
            "spark_width": _SPARK_WIDTH,
            "spark_height": _SPARK_HEIGHT,
        },
    )


@router.get("/ui/locations/{location_id}", name="ui_location_detail", response_class=HTMLResponse)
async def ui_location_detail(
    request: Request,
    location_id: str,
    dashboard: DashboardService = Depends(get_dashboard),
) -> HTMLResponse:
    try:
        detail = dashboard.detail(location_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.args[0] if exc.args else str(exc),
        ) from exc

    series = {
        "pH": sparkline_points([s.ph for s in detail.samples]),
        "Dissolved Oxygen": sparkline_points([s.dissolved_oxygen for s in detail.samples]),
        "BOD": sparkline_points([s.bod for s in detail.samples]),
        "Turbidity": sparkline_points([s.turbidity for s in detail.samples]),
    }

    return templates.TemplateResponse(
        request,
        "ui/detail.html",
        {
            "detail": detail,
            "series": series,
            "chemical_labels": CHEMICAL_LABELS,
            "spark_width": _SPARK_WIDTH,
            "spark_height": _SPARK_HEIGHT,
        },
    )

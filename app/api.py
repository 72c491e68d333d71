"""HTTP route definitions for the service."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import EvaluationRequest, EvaluationResult, LocationDetail, LocationSummary
from services.dashboard import DashboardService, build_default_dashboard

router = APIRouter()


def get_dashboard() -> DashboardService:
    return build_default_dashboard()


@router.get(
    "/locations",
    response_model=List[LocationSummary],
    summary="List monitoring locations with their alert flags.",
)
async def list_locations(
    dashboard: DashboardService = Depends(get_dashboard),
) -> List[LocationSummary]:
    return dashboard.overview()


@router.get(
    "/locations/{location_id}",
    response_model=LocationDetail,
    summary="Fetch the sample series and treatment advice for a location.",
)
async def get_location(
    location_id: str,
    dashboard: DashboardService = Depends(get_dashboard),
) -> LocationDetail:
    try:
        return dashboard.detail(location_id)
    except KeyError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=exc.args[0] if exc.args else str(exc),
        ) from exc


@router.post(
    "/evaluate",
    response_model=EvaluationResult,
    summary="Evaluate an arbitrary sample series.",
)
async def evaluate_samples(
    request: EvaluationRequest,
    dashboard: DashboardService = Depends(get_dashboard),
) -> EvaluationResult:
    return dashboard.evaluate([sample.to_sample() for sample in request.samples])


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}

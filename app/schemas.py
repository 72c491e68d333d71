"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from models.records import Location, LocationStatus, TreatmentRecommendation, WaterSample


class SamplePayload(BaseModel):
    """One hourly water-quality measurement."""

    hour: int = Field(..., ge=0, le=23)
    turbidity: float = Field(..., allow_inf_nan=False, description="Turbidity in NTU.")
    ph: float = Field(..., allow_inf_nan=False)
    dissolved_oxygen: float = Field(..., allow_inf_nan=False, description="mg/L")
    bod: float = Field(..., allow_inf_nan=False, description="Biochemical oxygen demand, mg/L.")

    @classmethod
    def from_sample(cls, sample: WaterSample) -> "SamplePayload":
        return cls(
            hour=sample.hour,
            turbidity=sample.turbidity,
            ph=sample.ph,
            dissolved_oxygen=sample.dissolved_oxygen,
            bod=sample.bod,
        )

    def to_sample(self) -> WaterSample:
        return WaterSample(
            hour=self.hour,
            turbidity=self.turbidity,
            ph=self.ph,
            dissolved_oxygen=self.dissolved_oxygen,
            bod=self.bod,
        )


class Recommendation(BaseModel):
    """Chemical doses per 1000 m3 of water."""

    coagulant_kg: float
    flocculant_kg: float
    ph_adjuster_kg: float
    activated_carbon_kg: float

    @classmethod
    def from_domain(cls, recommendation: TreatmentRecommendation) -> "Recommendation":
        return cls(
            coagulant_kg=recommendation.coagulant_kg,
            flocculant_kg=recommendation.flocculant_kg,
            ph_adjuster_kg=recommendation.ph_adjuster_kg,
            activated_carbon_kg=recommendation.activated_carbon_kg,
        )


class TreatmentPlan(BaseModel):
    """Recommendation bundled with the static advisory text shown beside it."""

    recommendation: Recommendation
    strategies: List[str] = Field(default_factory=list)
    process: List[str] = Field(default_factory=list)


class LocationSummary(BaseModel):
    location_id: str
    name: str
    status: LocationStatus
    alerting: bool

    @classmethod
    def from_location(cls, location: Location, alerting: bool) -> "LocationSummary":
        return cls(
            location_id=location.location_id,
            name=location.name,
            status=location.status,
            alerting=alerting,
        )


class LocationDetail(LocationSummary):
    """Full advisory view for one monitoring location."""

    samples: List[SamplePayload] = Field(default_factory=list)
    latest_breaches: List[str] = Field(
        default_factory=list,
        description="Parameters of the most recent sample outside their limits.",
    )
    treatment: Optional[TreatmentPlan] = Field(
        default=None, description="Present only while the location is alerting."
    )


class EvaluationRequest(BaseModel):
    samples: List[SamplePayload] = Field(default_factory=list)


class EvaluationResult(BaseModel):
    alerting: bool
    recommendation: Optional[Recommendation] = None
    breached_parameters: List[str] = Field(
        default_factory=list,
        description="Union of parameters breached by any sample, in fixed order.",
    )

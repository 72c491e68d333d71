"""Threshold evaluation and treatment dosing for water-quality series."""

from __future__ import annotations

from typing import List, Optional, Sequence

from models.records import TreatmentRecommendation, WaterSample

# Reporting order for parameter names.
WATER_PARAMETERS = ("turbidity", "ph", "dissolved_oxygen", "bod")

TURBIDITY_ALERT_NTU = 30.0
PH_LOW = 6.5
PH_HIGH = 8.5
DISSOLVED_OXYGEN_MIN = 5.0
BOD_MAX = 3.0

# Coagulant dosing steps up at a higher turbidity than the alert limit.
COAGULANT_BOOST_NTU = 40.0

COAGULANT_BASE_KG = 20.0
COAGULANT_BOOST_KG = 5.0
FLOCCULANT_BASE_KG = 0.8
FLOCCULANT_BOOST_KG = 0.2
PH_ADJUSTER_BASE_KG = 7.0
PH_ADJUSTER_LOW_PH_KG = 8.0
PH_ADJUSTER_HIGH_PH_KG = 6.0
ACTIVATED_CARBON_BASE_KG = 12.0
ACTIVATED_CARBON_BOOST_KG = 5.0

TREATMENT_STRATEGIES = (
    "Industrial wastewater management using advanced oxidation, bio-filtration, "
    "and chemical precipitation.",
    "River revitalization with constructed wetlands, aeration systems, "
    "and sedimentation control.",
    "Weir-based treatment for turbidity reduction, flow management, "
    "and controlled sediment removal.",
    "Continuous monitoring with IoT sensors and AI models to optimize treatment scheduling.",
)

TREATMENT_PROCESS = (
    "Coagulants",
    "Flocculation",
    "Sedimentation",
    "Aeration",
    "pH Adjustment",
    "Filtration",
    "Discharge",
)

CHEMICAL_LABELS = {
    "coagulant_kg": "Coagulants (Alum/Ferric Chloride)",
    "flocculant_kg": "Flocculants (Polyacrylamide)",
    "ph_adjuster_kg": "pH adjusters (Lime/Sodium Carbonate)",
    "activated_carbon_kg": "Activated carbon",
}


def breached_parameters(sample: WaterSample) -> List[str]:
    """Return the names of the parameters of ``sample`` outside their limits."""
    out_of_range = {
        "turbidity": sample.turbidity > TURBIDITY_ALERT_NTU,
        "ph": sample.ph < PH_LOW or sample.ph > PH_HIGH,
        "dissolved_oxygen": sample.dissolved_oxygen < DISSOLVED_OXYGEN_MIN,
        "bod": sample.bod > BOD_MAX,
    }
    return [name for name in WATER_PARAMETERS if out_of_range[name]]


def _sample_alerts(sample: WaterSample) -> bool:
    return (
        sample.turbidity > TURBIDITY_ALERT_NTU
        or sample.ph < PH_LOW
        or sample.ph > PH_HIGH
        or sample.dissolved_oxygen < DISSOLVED_OXYGEN_MIN
        or sample.bod > BOD_MAX
    )


def is_alerting(samples: Sequence[WaterSample]) -> bool:
    """True when any sample in the series crosses an alert threshold.

    An empty series never alerts.
    """
    return any(_sample_alerts(sample) for sample in samples)


def recommend(samples: Sequence[WaterSample]) -> Optional[TreatmentRecommendation]:
    """Compute treatment doses from the most recent sample of a series.

    Earlier samples are ignored. Returns ``None`` for an empty series.
    """
    if not samples:
        return None
    latest = samples[-1]

    coagulant = COAGULANT_BASE_KG
    if latest.turbidity > COAGULANT_BOOST_NTU:
        coagulant += COAGULANT_BOOST_KG

    flocculant = FLOCCULANT_BASE_KG
    if latest.dissolved_oxygen < DISSOLVED_OXYGEN_MIN:
        flocculant += FLOCCULANT_BOOST_KG

    if latest.ph < PH_LOW:
        ph_adjuster = PH_ADJUSTER_LOW_PH_KG
    elif latest.ph > PH_HIGH:
        ph_adjuster = PH_ADJUSTER_HIGH_PH_KG
    else:
        ph_adjuster = PH_ADJUSTER_BASE_KG

    activated_carbon = ACTIVATED_CARBON_BASE_KG
    if latest.bod > BOD_MAX:
        activated_carbon += ACTIVATED_CARBON_BOOST_KG

    return TreatmentRecommendation(
        coagulant_kg=coagulant,
        flocculant_kg=flocculant,
        ph_adjuster_kg=ph_adjuster,
        activated_carbon_kg=activated_carbon,
    )

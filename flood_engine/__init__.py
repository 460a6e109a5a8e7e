"""
Flood risk core.

Four pure pieces: snapshot aggregation, live-data classification, what-if
simulation and the recommendation rule table. No I/O, no logging.
"""

from .snapshot import (
    ABSENT,
    Absent,
    EnvironmentalSnapshot,
    Measurement,
    Present,
    SourceResult,
    aggregate,
    as_source,
    default_snapshot,
)
from .classifier import FloodAssessment, FloodPotential, Severity, Verdict, classify
from .simulator import (
    PRESET_SCENARIOS,
    RiskLevel,
    RiskSimulationResult,
    SimulationParameters,
    SoilAbsorption,
    risk_color,
    simulate,
    simulate_parameters,
)
from .recommendations import Priority, Recommendation, recommend, sort_by_priority

__all__ = [
    "ABSENT",
    "Absent",
    "EnvironmentalSnapshot",
    "Measurement",
    "Present",
    "SourceResult",
    "aggregate",
    "as_source",
    "default_snapshot",
    "FloodAssessment",
    "FloodPotential",
    "Severity",
    "Verdict",
    "classify",
    "PRESET_SCENARIOS",
    "RiskLevel",
    "RiskSimulationResult",
    "SimulationParameters",
    "SoilAbsorption",
    "risk_color",
    "simulate",
    "simulate_parameters",
    "Priority",
    "Recommendation",
    "recommend",
    "sort_by_priority",
]

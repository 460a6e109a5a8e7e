# backend/flood_engine/simulator.py
"""
Scenario Simulator.

What-if model of flood probability from forest cover, rainfall intensity and
soil absorption. Works on user-chosen inputs, never on live telemetry.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Union


class SoilAbsorption(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: Union[str, "SoilAbsorption", None]) -> "SoilAbsorption":
        """Unknown labels fall back to MEDIUM."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.MEDIUM


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


RAINFALL_REFERENCE_MM = 300.0
# Keeps the unclamped runoff and impact figures finite
RAINFALL_CEILING_MM = 100 * RAINFALL_REFERENCE_MM

FOREST_WEIGHT = 40
RAINFALL_WEIGHT = 40
SOIL_WEIGHT = 20

RUNOFF_FOREST = 0.5
RUNOFF_RAINFALL = 0.3
RUNOFF_SOIL = 0.2

# UI slider defaults
DEFAULT_FOREST_COVER = 60.0
DEFAULT_RAINFALL_MM = 150.0
DEFAULT_SOIL_ABSORPTION = SoilAbsorption.MEDIUM


@dataclass(frozen=True)
class SimulationParameters:
    forest_cover_percent: float = DEFAULT_FOREST_COVER
    rainfall_mm: float = DEFAULT_RAINFALL_MM
    soil_absorption: SoilAbsorption = DEFAULT_SOIL_ABSORPTION

    def to_dict(self) -> Dict[str, Any]:
        return {
            "forest_cover": self.forest_cover_percent,
            "rainfall": self.rainfall_mm,
            "soil_absorption": self.soil_absorption.value,
        }


@dataclass(frozen=True)
class RiskFactors:
    forest_impact: int
    rainfall_impact: int
    soil_impact: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "forest_impact": self.forest_impact,
            "rainfall_impact": self.rainfall_impact,
            "soil_impact": self.soil_impact,
        }


@dataclass(frozen=True)
class RiskSimulationResult:
    flood_probability: int
    water_runoff: int
    environmental_health: int
    risk_level: RiskLevel
    factors: RiskFactors

    def to_dict(self) -> Dict[str, Any]:
        return {
            "flood_probability": self.flood_probability,
            "water_runoff": self.water_runoff,
            "environmental_health": self.environmental_health,
            "risk_level": self.risk_level.value,
            "factors": self.factors.to_dict(),
        }


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _bounded_rainfall(rainfall: float) -> float:
    """Negative and NaN -> 0; anything above the ceiling, inf included, -> ceiling."""
    mm = float(rainfall)
    if math.isnan(mm) or mm < 0:
        return 0.0
    return min(mm, RAINFALL_CEILING_MM)


def soil_factor(absorption: SoilAbsorption) -> float:
    if absorption is SoilAbsorption.LOW:
        return 0.9
    if absorption is SoilAbsorption.HIGH:
        return 0.2
    return 0.5


def risk_level_for(probability: float) -> RiskLevel:
    # strict bounds: 70, 50 and 30 fall into the lower bucket
    if probability > 70:
        return RiskLevel.CRITICAL
    if probability > 50:
        return RiskLevel.HIGH
    if probability > 30:
        return RiskLevel.MEDIUM
    return RiskLevel.LOW


def risk_color(level: Union[RiskLevel, str]) -> str:
    """Hex colour for a risk level; unknown levels get the low colour."""
    try:
        level = RiskLevel(level)
    except ValueError:
        level = RiskLevel.LOW
    if level is RiskLevel.CRITICAL:
        return "#991b1b"
    if level is RiskLevel.HIGH:
        return "#ef4444"
    if level is RiskLevel.MEDIUM:
        return "#f59e0b"
    return "#10b981"


def simulate(
    forest_cover: float,
    rainfall: float,
    soil_absorption: Union[SoilAbsorption, str],
) -> RiskSimulationResult:
    """
    Returns the simulated flood risk for a scenario.

    flood_probability is clamped to 0-100. water_runoff and the factor
    impacts are not: rainfall above 300 mm pushes them past 100.
    """
    forest_cover = min(100.0, max(0.0, float(forest_cover)))
    forest_factor = 1 - forest_cover / 100
    rainfall_factor = _bounded_rainfall(rainfall) / RAINFALL_REFERENCE_MM
    s_factor = soil_factor(SoilAbsorption.parse(soil_absorption))

    base = FOREST_WEIGHT * forest_factor + RAINFALL_WEIGHT * rainfall_factor + SOIL_WEIGHT * s_factor
    flood_probability = round_half_up(min(100.0, max(0.0, base)))

    runoff = (RUNOFF_FOREST * forest_factor + RUNOFF_RAINFALL * rainfall_factor + RUNOFF_SOIL * s_factor) * 100

    return RiskSimulationResult(
        flood_probability=flood_probability,
        water_runoff=round_half_up(runoff),
        environmental_health=100 - flood_probability,
        # bucketed on the reported integer; the web UI buckets the raw score (70.4 -> critical there)
        risk_level=risk_level_for(flood_probability),
        factors=RiskFactors(
            forest_impact=round_half_up(forest_factor * 100),
            rainfall_impact=round_half_up(rainfall_factor * 100),
            soil_impact=round_half_up(s_factor * 100),
        ),
    )


def simulate_parameters(params: SimulationParameters) -> RiskSimulationResult:
    return simulate(params.forest_cover_percent, params.rainfall_mm, params.soil_absorption)


PRESET_SCENARIOS: List[Dict[str, Any]] = [
    {
        "key": "optimal_ecosystem",
        "label": "Optimal ecosystem",
        "description": "80% forest cover, low rainfall, healthy soil",
        "parameters": SimulationParameters(80.0, 100.0, SoilAbsorption.HIGH),
    },
    {
        "key": "critical_condition",
        "label": "Critical condition",
        "description": "Severe deforestation (20%), extreme 250 mm rain, damaged soil",
        "parameters": SimulationParameters(20.0, 250.0, SoilAbsorption.LOW),
    },
    {
        "key": "typical_condition",
        "label": "Typical condition",
        "description": "50% forest cover, 180 mm rainfall, average soil",
        "parameters": SimulationParameters(50.0, 180.0, SoilAbsorption.MEDIUM),
    },
]

# backend/flood_engine/recommendations.py
"""
Recommendation Engine.

A fixed, ordered rule table over a RiskSimulationResult. Rules are additive:
every rule whose guard holds appends its items, and no rule removes or
reorders another's output.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple

from .simulator import RiskSimulationResult


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


PRIORITY_RANK = {
    Priority.CRITICAL: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


@dataclass(frozen=True)
class Recommendation:
    icon: str
    text: str
    priority: Priority

    def to_dict(self) -> Dict[str, str]:
        return {"icon": self.icon, "text": self.text, "priority": self.priority.value}


def _rec(icon: str, text: str, priority: Priority) -> Recommendation:
    return Recommendation(icon, text, priority)


# --- Rule outputs ---
CRITICAL_RISK = (
    _rec("AlertOctagon", "Raise alert level: flood risk is very high! Coordinate immediately with the relevant agencies on disaster mitigation.", Priority.CRITICAL),
    _rec("Construction", "Prioritize building drainage infrastructure and flood embankments in flood-prone areas.", Priority.CRITICAL),
)

FOREST_SEVERE = (
    _rec("TreePine", "Deforestation impact is very significant! Carry out intensive reforestation of at least 1000 trees per hectare in critical areas.", Priority.HIGH),
    _rec("Shield", "Enforce strict forest conservation and a logging moratorium in water catchment areas.", Priority.HIGH),
)
FOREST_HIGH = (
    _rec("Trees", "Increase forest cover by planting native species with strong, water-absorbing root systems.", Priority.MEDIUM),
)
FOREST_MODERATE = (
    _rec("Sprout", "Maintain existing forest cover and rehabilitate degraded areas.", Priority.MEDIUM),
)

RAINFALL_SEVERE = (
    _rec("CloudRain", "Extreme rainfall intensity! Build a modern drainage system with 300+ mm/day capacity.", Priority.HIGH),
    _rec("Waves", "Build retention ponds to hold excess stormwater runoff.", Priority.HIGH),
)
RAINFALL_HIGH = (
    _rec("Droplets", "Repair and extend the existing drainage network to handle the increased water volume.", Priority.MEDIUM),
)

SOIL_SEVERE = (
    _rec("Mountain", "Critical soil condition! Apply bioengineering methods to restore soil structure and porosity.", Priority.HIGH),
    _rec("Layers", "Conserve soil with terracing and infiltration wells on every plot.", Priority.HIGH),
)
SOIL_HIGH = (
    _rec("Leaf", "Improve soil infiltration by adding organic matter and reducing compaction.", Priority.MEDIUM),
)

MONITORING = (
    _rec("BarChart3", "Study water flow patterns in depth and identify spots prone to waterlogging.", Priority.MEDIUM),
    _rec("Users", "Introduce a flood early-warning system to communities in at-risk areas.", Priority.MEDIUM),
)
PREVENTIVE = (
    _rec("Eye", "Monitor environmental conditions regularly to prevent flood risk from rising.", Priority.LOW),
    _rec("BookOpen", "Educate communities on the importance of protecting forests and the environment.", Priority.LOW),
)
MAINTENANCE = (
    _rec("CheckCircle", "Environmental conditions are good! Flood risk is low with the current parameters.", Priority.LOW),
    _rec("Sparkles", "Keep the ecosystem in balance by continuing to care for forest cover and soil quality.", Priority.LOW),
    _rec("ClipboardCheck", "Keep up routine monitoring to ensure conditions stay optimal all year.", Priority.LOW),
)

DEFORESTATION_AND_POOR_SOIL = (
    _rec("Zap", "Deforestation combined with poor soil multiplies the risk! Prioritize rehabilitation of critical land.", Priority.CRITICAL),
)
FLASH_FLOOD = (
    _rec("Wind", "Extreme rain plus deforestation means flash flood risk! Build a community early-warning system.", Priority.CRITICAL),
)


def _ladder(value: int, steps: List[Tuple[int, Tuple[Recommendation, ...]]]) -> Tuple[Recommendation, ...]:
    for threshold, recs in steps:
        if value > threshold:
            return recs
    return ()


def _critical_risk(r: RiskSimulationResult) -> Tuple[Recommendation, ...]:
    return CRITICAL_RISK if r.flood_probability > 70 else ()


def _forest(r: RiskSimulationResult) -> Tuple[Recommendation, ...]:
    return _ladder(r.factors.forest_impact, [(70, FOREST_SEVERE), (50, FOREST_HIGH), (30, FOREST_MODERATE)])


def _rainfall(r: RiskSimulationResult) -> Tuple[Recommendation, ...]:
    return _ladder(r.factors.rainfall_impact, [(70, RAINFALL_SEVERE), (50, RAINFALL_HIGH)])


def _soil(r: RiskSimulationResult) -> Tuple[Recommendation, ...]:
    return _ladder(r.factors.soil_impact, [(70, SOIL_SEVERE), (50, SOIL_HIGH)])


def _monitoring(r: RiskSimulationResult) -> Tuple[Recommendation, ...]:
    return MONITORING if 50 <= r.flood_probability <= 70 else ()


def _preventive(r: RiskSimulationResult) -> Tuple[Recommendation, ...]:
    return PREVENTIVE if 30 <= r.flood_probability < 50 else ()


def _maintenance(r: RiskSimulationResult) -> Tuple[Recommendation, ...]:
    return MAINTENANCE if r.flood_probability < 30 else ()


def _deforestation_and_poor_soil(r: RiskSimulationResult) -> Tuple[Recommendation, ...]:
    f = r.factors
    return DEFORESTATION_AND_POOR_SOIL if f.forest_impact > 60 and f.soil_impact > 60 else ()


def _flash_flood(r: RiskSimulationResult) -> Tuple[Recommendation, ...]:
    f = r.factors
    return FLASH_FLOOD if f.rainfall_impact > 60 and f.forest_impact > 60 else ()


RULES: List[Callable[[RiskSimulationResult], Tuple[Recommendation, ...]]] = [
    _critical_risk,
    _forest,
    _rainfall,
    _soil,
    _monitoring,
    _preventive,
    _maintenance,
    _deforestation_and_poor_soil,
    _flash_flood,
]


def recommend(result: RiskSimulationResult) -> List[Recommendation]:
    """Recommendations in rule order, not severity order."""
    out: List[Recommendation] = []
    for rule in RULES:
        out.extend(rule(result))
    return out


def sort_by_priority(recommendations: List[Recommendation]) -> List[Recommendation]:
    """Stable sort, most urgent first."""
    return sorted(recommendations, key=lambda rec: PRIORITY_RANK[rec.priority])

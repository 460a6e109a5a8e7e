# backend/flood_engine/classifier.py
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Tuple

from .snapshot import EnvironmentalSnapshot


class Severity(str, Enum):
    NORMAL = "normal"
    MODERATE = "moderate"
    SEVERE = "severe"


class FloodPotential(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


# --- Threshold ladders (upper bounds are exclusive) ---
SOIL_MOISTURE_MODERATE = 0.30   # m³/m³, field capacity for most topsoils
SOIL_MOISTURE_SEVERE = 0.40     # m³/m³, near saturation

RIVER_DISCHARGE_MODERATE = 100.0   # m³/s
RIVER_DISCHARGE_SEVERE = 500.0     # m³/s

RAIN_LIGHT_MAX = 20.0        # mm/day
RAIN_MODERATE_MAX = 50.0
RAIN_HEAVY_MAX = 100.0
RAIN_VERY_HEAVY_MAX = 150.0

LOWLAND_ELEVATION = 10.0     # m
COASTAL_PLAIN_ELEVATION = 50.0
DRAINAGE_HEAVY_RAIN = 50.0   # mm/day

# Summary weighting for the moderate majority vote
VERDICT_WEIGHTS = {
    "drainage": 1.0,
    "soil_condition": 1.0,
    "river_status": 1.5,
    "rain_analysis": 1.5,
}
MODERATE_MAJORITY = 0.5

_DIMENSION_NAMES = {
    "drainage": "natural drainage",
    "soil_condition": "soil moisture",
    "river_status": "river discharge",
    "rain_analysis": "rainfall",
}


@dataclass(frozen=True)
class Verdict:
    severity: Severity
    label: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"severity": self.severity.value, "label": self.label, "text": self.text}


@dataclass(frozen=True)
class OverallPotential:
    level: FloodPotential
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"level": self.level.value, "text": self.text}


@dataclass(frozen=True)
class FloodAssessment:
    drainage: Verdict
    soil_condition: Verdict
    river_status: Verdict
    rain_analysis: Verdict
    overall_flood_potential: OverallPotential
    hour_of_day: int

    def verdicts(self) -> List[Tuple[str, Verdict]]:
        return [
            ("drainage", self.drainage),
            ("soil_condition", self.soil_condition),
            ("river_status", self.river_status),
            ("rain_analysis", self.rain_analysis),
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "result": {name: v.to_dict() for name, v in self.verdicts()},
            "overall_flood_potential": self.overall_flood_potential.to_dict(),
            "hour_of_day": self.hour_of_day,
        }


def _non_negative(val: float) -> float:
    return max(0.0, float(val))


def classify_soil(moisture: float) -> Verdict:
    m = _non_negative(moisture)
    if m < SOIL_MOISTURE_MODERATE:
        return Verdict(Severity.NORMAL, "Dry to normal",
                       "Topsoil still has room to absorb rainfall.")
    if m < SOIL_MOISTURE_SEVERE:
        return Verdict(Severity.MODERATE, "Moist",
                       "Topsoil is wet; absorption is reduced and runoff starts earlier.")
    return Verdict(Severity.SEVERE, "Saturated",
                   "Topsoil is saturated; further rainfall turns almost entirely into runoff.")


def classify_river(discharge: float) -> Verdict:
    q = _non_negative(discharge)
    if q < RIVER_DISCHARGE_MODERATE:
        return Verdict(Severity.NORMAL, "Normal",
                       "River discharge is within its usual range.")
    if q < RIVER_DISCHARGE_SEVERE:
        return Verdict(Severity.MODERATE, "Elevated",
                       "River discharge is elevated; watch low banks and floodplains.")
    return Verdict(Severity.SEVERE, "Flood flow",
                   "River discharge is very high; overbank flow is likely.")


def classify_rain(precipitation: float) -> Verdict:
    p = _non_negative(precipitation)
    if p == 0:
        return Verdict(Severity.NORMAL, "No rain", "No rainfall recorded for today.")
    if p < RAIN_LIGHT_MAX:
        return Verdict(Severity.NORMAL, "Light rain",
                       "Light rainfall, easily handled by normal drainage.")
    if p < RAIN_MODERATE_MAX:
        return Verdict(Severity.MODERATE, "Moderate rain",
                       "Moderate rainfall; puddling possible in poorly drained areas.")
    if p < RAIN_HEAVY_MAX:
        return Verdict(Severity.MODERATE, "Heavy rain",
                       "Heavy rainfall; local waterlogging is possible.")
    if p < RAIN_VERY_HEAVY_MAX:
        return Verdict(Severity.SEVERE, "Very heavy rain",
                       "Very heavy rainfall; drainage capacity is likely to be exceeded.")
    return Verdict(Severity.SEVERE, "Extreme rain",
                   "Extreme rainfall; flash flooding is likely.")


def classify_drainage(elevation: float, precipitation: float) -> Verdict:
    # elevation may legitimately be below sea level
    p = _non_negative(precipitation)
    if elevation < LOWLAND_ELEVATION and p >= DRAINAGE_HEAVY_RAIN:
        return Verdict(Severity.SEVERE, "Overwhelmed",
                       "Low-lying terrain under heavy rain; water has nowhere to drain.")
    if elevation < LOWLAND_ELEVATION:
        return Verdict(Severity.MODERATE, "Slow",
                       "Low-lying terrain drains slowly even in normal conditions.")
    if elevation < COASTAL_PLAIN_ELEVATION and p >= DRAINAGE_HEAVY_RAIN:
        return Verdict(Severity.MODERATE, "Strained",
                       "Lowland terrain under heavy rain; drainage is under strain.")
    return Verdict(Severity.NORMAL, "Good",
                   "Terrain elevation allows water to drain away naturally.")


def summarize(verdicts: List[Tuple[str, Verdict]]) -> OverallPotential:
    """
    Precedence: any severe -> HIGH; moderate weight share >= 0.5 -> MODERATE;
    otherwise LOW (with a watch note when some dimension is moderate).
    """
    severe = [name for name, v in verdicts if v.severity is Severity.SEVERE]
    if severe:
        names = ", ".join(_DIMENSION_NAMES[n] for n in severe)
        return OverallPotential(
            FloodPotential.HIGH,
            f"High flood potential: severe conditions in {names}.",
        )

    moderate = [name for name, v in verdicts if v.severity is Severity.MODERATE]
    if not moderate:
        return OverallPotential(
            FloodPotential.LOW,
            "Low flood potential: all indicators are within normal range.",
        )

    total = sum(VERDICT_WEIGHTS[name] for name, _ in verdicts)
    share = sum(VERDICT_WEIGHTS[name] for name in moderate) / total
    names = ", ".join(_DIMENSION_NAMES[n] for n in moderate)
    if share >= MODERATE_MAJORITY:
        return OverallPotential(
            FloodPotential.MODERATE,
            f"Moderate flood potential: elevated {names}.",
        )
    return OverallPotential(
        FloodPotential.LOW,
        f"Low flood potential, keep watching {names}.",
    )


def classify(snapshot: EnvironmentalSnapshot) -> FloodAssessment:
    precipitation = snapshot.precipitation_sum.value
    verdicts = [
        ("drainage", classify_drainage(snapshot.elevation, precipitation)),
        ("soil_condition", classify_soil(snapshot.soil_moisture_surface.value)),
        ("river_status", classify_river(snapshot.river_discharge_mean.value)),
        ("rain_analysis", classify_rain(precipitation)),
    ]
    return FloodAssessment(
        drainage=verdicts[0][1],
        soil_condition=verdicts[1][1],
        river_status=verdicts[2][1],
        rain_analysis=verdicts[3][1],
        overall_flood_potential=summarize(verdicts),
        hour_of_day=snapshot.hour_of_day,
    )

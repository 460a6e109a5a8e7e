# backend/flood_engine/snapshot.py
"""
Snapshot Aggregator.

Merges the weather (Open-Meteo forecast) and hydrology (Open-Meteo flood)
payloads into one EnvironmentalSnapshot. Each source arrives as either
Present(payload) or ABSENT; every combination produces a fully populated
snapshot.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Dict, Optional, Sequence, Union

PRECIPITATION_UNIT = "mm"
SOIL_MOISTURE_UNIT = "m³/m³"
RIVER_DISCHARGE_UNIT = "m³/s"


@dataclass(frozen=True)
class Measurement:
    value: float
    unit: str

    def __str__(self) -> str:
        return f"{self.value} {self.unit}"

    def to_dict(self) -> Dict[str, Any]:
        return {"value": self.value, "unit": self.unit}


@dataclass(frozen=True)
class EnvironmentalSnapshot:
    elevation: float
    precipitation_sum: Measurement
    soil_moisture_surface: Measurement
    river_discharge_mean: Measurement
    hour_of_day: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "elevation": self.elevation,
            "precipitation_sum": self.precipitation_sum.to_dict(),
            "soil_moisture_surface": self.soil_moisture_surface.to_dict(),
            "river_discharge_mean": self.river_discharge_mean.to_dict(),
            "hour_of_day": self.hour_of_day,
        }


@dataclass(frozen=True)
class Present:
    payload: Dict[str, Any]


class Absent:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent()

SourceResult = Union[Present, Absent]


def as_source(payload: Optional[Dict[str, Any]]) -> SourceResult:
    """Wrap an optional payload; None means the fetch failed."""
    if payload is None:
        return ABSENT
    return Present(payload)


def default_snapshot(hour_of_day: int = 0) -> EnvironmentalSnapshot:
    return EnvironmentalSnapshot(
        elevation=0.0,
        precipitation_sum=Measurement(0.0, PRECIPITATION_UNIT),
        soil_moisture_surface=Measurement(0.0, SOIL_MOISTURE_UNIT),
        river_discharge_mean=Measurement(0.0, RIVER_DISCHARGE_UNIT),
        hour_of_day=hour_of_day,
    )


def _to_float(val: Any, default: float = 0.0) -> float:
    if val is None or isinstance(val, bool):
        return default
    try:
        f = float(val)
    except (TypeError, ValueError):
        return default
    # NaN never equals itself
    if f != f:
        return default
    return f


def _value_at(series: Any, index: int) -> float:
    if not isinstance(series, Sequence) or isinstance(series, str):
        return 0.0
    if index < 0 or index >= len(series):
        return 0.0
    return _to_float(series[index])


def _section(payload: Dict[str, Any], key: str) -> Dict[str, Any]:
    sec = payload.get(key) if isinstance(payload, dict) else None
    return sec if isinstance(sec, dict) else {}


def _unit(units: Dict[str, Any], key: str, default: str) -> str:
    u = units.get(key)
    return u if isinstance(u, str) and u else default


def _weather_fields(payload: Dict[str, Any], hour: int) -> Dict[str, Any]:
    daily = _section(payload, "daily")
    daily_units = _section(payload, "daily_units")
    hourly = _section(payload, "hourly")
    hourly_units = _section(payload, "hourly_units")

    return {
        "elevation": _to_float(payload.get("elevation") if isinstance(payload, dict) else None),
        "precipitation_sum": Measurement(
            _value_at(daily.get("precipitation_sum"), 0),
            _unit(daily_units, "precipitation_sum", PRECIPITATION_UNIT),
        ),
        "soil_moisture_surface": Measurement(
            _value_at(hourly.get("soil_moisture_0_to_1cm"), hour),
            _unit(hourly_units, "soil_moisture_0_to_1cm", SOIL_MOISTURE_UNIT),
        ),
    }


def _hydrology_fields(payload: Dict[str, Any]) -> Dict[str, Any]:
    daily = _section(payload, "daily")
    daily_units = _section(payload, "daily_units")
    return {
        "river_discharge_mean": Measurement(
            _value_at(daily.get("river_discharge_mean"), 0),
            _unit(daily_units, "river_discharge_mean", RIVER_DISCHARGE_UNIT),
        ),
    }


def aggregate(
    weather: SourceResult,
    hydrology: SourceResult,
    now: Optional[datetime] = None,
) -> EnvironmentalSnapshot:
    """
    Merge two independently fetched sources into one snapshot.

    Cases:
      both present   -> weather fields + hydrology discharge
      weather only   -> discharge (0, m³/s)
      hydrology only -> elevation 0, precipitation (0, mm), soil (0, m³/m³)
      neither        -> zero-filled default snapshot

    hour_of_day always comes from the wall clock, whatever the sources.
    """
    hour = (now or datetime.now()).hour
    snapshot = default_snapshot(hour)

    if isinstance(weather, Present):
        snapshot = replace(snapshot, **_weather_fields(weather.payload, hour))
    if isinstance(hydrology, Present):
        snapshot = replace(snapshot, **_hydrology_fields(hydrology.payload))

    return snapshot

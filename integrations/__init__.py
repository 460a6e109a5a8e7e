"""
Integration layer for the Flood Risk backend.

Adapters around the upstream data sources. They degrade gracefully: a
failed call returns None (wrapped as ABSENT) instead of raising.
"""

from .open_meteo_adapter import (
    fetch_hydrology_payload,
    fetch_sources_sequential,
    fetch_weather_payload,
)

__all__ = [
    "fetch_weather_payload",
    "fetch_hydrology_payload",
    "fetch_sources_sequential",
]

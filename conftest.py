import os
import sys
from datetime import datetime

import pytest

# Add the backend directory to the path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))


@pytest.fixture
def weather_payload():
    """Trimmed Open-Meteo forecast response (Jakarta-like lowland)."""
    return {
        "latitude": -6.2,
        "longitude": 106.8,
        "elevation": 12.0,
        "daily_units": {"time": "iso8601", "precipitation_sum": "mm"},
        "daily": {"time": ["2026-10-19"], "precipitation_sum": [42.5]},
        "hourly_units": {"time": "iso8601", "soil_moisture_0_to_1cm": "m³/m³"},
        "hourly": {
            "time": [f"2026-10-19T{h:02d}:00" for h in range(24)],
            "soil_moisture_0_to_1cm": [round(0.20 + h * 0.01, 3) for h in range(24)],
        },
    }


@pytest.fixture
def hydrology_payload():
    return {
        "latitude": -6.2,
        "longitude": 106.8,
        "daily_units": {"time": "iso8601", "river_discharge_mean": "m³/s"},
        "daily": {"time": ["2026-10-19"], "river_discharge_mean": [321.4]},
    }


@pytest.fixture
def afternoon():
    return datetime(2026, 10, 19, 14, 5)

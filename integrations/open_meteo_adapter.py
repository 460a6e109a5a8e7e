from typing import Any, Dict, Optional, Tuple
import requests

import config
from flood_engine.snapshot import SourceResult, as_source
from utils.api_logging import ApiCallLogger

# Standard headers to identify the application to Open-Meteo
_HEADERS = {
    "User-Agent": config.USER_AGENT,
    "Accept": "application/json",
}


def weather_params(lat: float, lng: float) -> Dict[str, Any]:
    return {
        "latitude": lat,
        "longitude": lng,
        "daily": "precipitation_sum",
        "hourly": "soil_moisture_0_to_1cm",
        "timezone": "auto",
        "forecast_days": 1,
    }


def hydrology_params(lat: float, lng: float) -> Dict[str, Any]:
    return {
        "latitude": lat,
        "longitude": lng,
        "daily": "river_discharge_mean",
        "forecast_days": 1,
    }


def is_weather_payload(data: Any) -> bool:
    """Forecast response must carry both the daily and hourly sections."""
    if not isinstance(data, dict) or data.get("error"):
        return False
    return isinstance(data.get("daily"), dict) and isinstance(data.get("hourly"), dict)


def is_hydrology_payload(data: Any) -> bool:
    if not isinstance(data, dict) or data.get("error"):
        return False
    return isinstance(data.get("daily"), dict)


def _fetch_json(url: str, params: Dict[str, Any], timeout: float,
                api_logger: ApiCallLogger) -> Optional[Dict[str, Any]]:
    api_logger.api_request(url, params)
    timing = None
    try:
        with api_logger.timed(f"GET {url}") as timing:
            resp = requests.get(url, params=params, headers=_HEADERS, timeout=timeout)
            resp.raise_for_status()
            data = resp.json()
    except (requests.RequestException, ValueError) as e:
        api_logger.api_error(url, e, timing.elapsed_ms if timing else None)
        return None
    api_logger.api_success(url, timing.elapsed_ms)
    return data


def fetch_weather_payload(lat: float, lng: float,
                          api_logger: Optional[ApiCallLogger] = None,
                          timeout: Optional[float] = None) -> Optional[Dict[str, Any]]:
    """
    Elevation, today's precipitation sum and hourly surface soil moisture.
    Returns None on any failure so the caller can treat the source as absent.
    """
    api_logger = api_logger or ApiCallLogger()
    data = _fetch_json(config.WEATHER_API_URL, weather_params(lat, lng),
                       timeout or config.WEATHER_TIMEOUT, api_logger)
    if data is None:
        api_logger.api_fallback("weather", "request failed")
        return None
    if not is_weather_payload(data):
        api_logger.api_fallback("weather", data.get("reason", "unexpected payload") if isinstance(data, dict) else "unexpected payload")
        return None
    return data


def fetch_hydrology_payload(lat: float, lng: float,
                            api_logger: Optional[ApiCallLogger] = None,
                            timeout: Optional[float] = None) -> Optional[Dict[str, Any]]:
    """Daily mean river discharge from the GloFAS-backed flood API."""
    api_logger = api_logger or ApiCallLogger()
    data = _fetch_json(config.FLOOD_API_URL, hydrology_params(lat, lng),
                       timeout or config.HYDROLOGY_TIMEOUT, api_logger)
    if data is None:
        api_logger.api_fallback("hydrology", "request failed")
        return None
    if not is_hydrology_payload(data):
        api_logger.api_fallback("hydrology", data.get("reason", "unexpected payload") if isinstance(data, dict) else "unexpected payload")
        return None
    return data


def fetch_sources_sequential(lat: float, lng: float,
                             api_logger: Optional[ApiCallLogger] = None) -> Tuple[SourceResult, SourceResult]:
    """Fetch weather then hydrology, one after the other."""
    api_logger = api_logger or ApiCallLogger()
    weather = fetch_weather_payload(lat, lng, api_logger)
    hydrology = fetch_hydrology_payload(lat, lng, api_logger)
    return as_source(weather), as_source(hydrology)

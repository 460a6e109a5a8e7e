"""
Runtime configuration for the Flood Risk backend.

Values come from the environment (a local .env is loaded first).
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


# ── Upstream data sources (Open-Meteo) ──────────────────────────────────────
WEATHER_API_URL = os.getenv("WEATHER_API_URL", "https://api.open-meteo.com/v1/forecast")
FLOOD_API_URL = os.getenv("FLOOD_API_URL", "https://flood-api.open-meteo.com/v1/flood")

# Independent per-source budgets (seconds)
WEATHER_TIMEOUT = _env_float("WEATHER_TIMEOUT", 8.0)
HYDROLOGY_TIMEOUT = _env_float("HYDROLOGY_TIMEOUT", 8.0)

# Fan both fetches out concurrently; false = one after the other
PARALLEL_FETCH = _env_bool("PARALLEL_FETCH", True)

USER_AGENT = os.getenv("USER_AGENT", "FloodRisk/1.0 (contact: support@example.com)")

# ── HTTP ────────────────────────────────────────────────────────────────────
ALLOWED_ORIGINS = [
    o.strip().rstrip("/")
    for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
    if o.strip()
]
PORT = int(_env_float("PORT", 5000))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

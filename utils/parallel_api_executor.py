"""
PARALLEL API EXECUTOR
Runs the weather and hydrology fetches concurrently, each with its own
timeout. A failed or timed-out call becomes ABSENT, never an exception.
"""

import asyncio
import time
from typing import Any, Dict, Optional, Tuple

import aiohttp

import config
from flood_engine.snapshot import ABSENT, SourceResult, as_source
from integrations.open_meteo_adapter import (
    hydrology_params,
    is_hydrology_payload,
    is_weather_payload,
    weather_params,
)
from utils.api_logging import ApiCallLogger


class ParallelAPIExecutor:
    """Fan out both upstream calls on one aiohttp session."""

    def __init__(self, api_logger: Optional[ApiCallLogger] = None,
                 weather_timeout: Optional[float] = None,
                 hydrology_timeout: Optional[float] = None):
        self.api_logger = api_logger or ApiCallLogger()
        self.weather_timeout = weather_timeout or config.WEATHER_TIMEOUT
        self.hydrology_timeout = hydrology_timeout or config.HYDROLOGY_TIMEOUT
        self.session = None

    async def __aenter__(self):
        connector = aiohttp.TCPConnector(limit=2)
        self.session = aiohttp.ClientSession(
            connector=connector,
            headers={"User-Agent": config.USER_AGENT, "Accept": "application/json"},
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.session:
            await self.session.close()

    async def fetch_sources(self, lat: float, lng: float) -> Tuple[SourceResult, SourceResult]:
        """Returns (weather, hydrology), each Present or ABSENT."""
        api_calls = {
            "weather": asyncio.wait_for(
                self._fetch_weather(lat, lng), timeout=self.weather_timeout),
            "hydrology": asyncio.wait_for(
                self._fetch_hydrology(lat, lng), timeout=self.hydrology_timeout),
        }

        start_time = time.time()
        results = await asyncio.gather(*api_calls.values(), return_exceptions=True)

        sources: Dict[str, SourceResult] = {}
        for key, result in zip(api_calls.keys(), results):
            if isinstance(result, asyncio.TimeoutError):
                self.api_logger.api_fallback(key, "timed out")
                sources[key] = ABSENT
            elif isinstance(result, Exception):
                self.api_logger.api_fallback(key, repr(result))
                sources[key] = ABSENT
            else:
                sources[key] = as_source(result)

        elapsed = time.time() - start_time
        self.api_logger.logger.info(f"Parallel fetch completed in {elapsed:.2f} seconds")
        return sources["weather"], sources["hydrology"]

    async def _fetch_json(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        self.api_logger.api_request(url, params)
        start = time.perf_counter()
        try:
            async with self.session.get(url, params=params) as response:
                response.raise_for_status()
                data = await response.json(content_type=None)
        except Exception as e:
            self.api_logger.api_error(url, e, (time.perf_counter() - start) * 1000)
            raise
        self.api_logger.api_success(url, (time.perf_counter() - start) * 1000)
        return data

    async def _fetch_weather(self, lat: float, lng: float) -> Optional[Dict[str, Any]]:
        data = await self._fetch_json(config.WEATHER_API_URL, weather_params(lat, lng))
        if not is_weather_payload(data):
            self.api_logger.api_fallback("weather", "unexpected payload")
            return None
        return data

    async def _fetch_hydrology(self, lat: float, lng: float) -> Optional[Dict[str, Any]]:
        data = await self._fetch_json(config.FLOOD_API_URL, hydrology_params(lat, lng))
        if not is_hydrology_payload(data):
            self.api_logger.api_fallback("hydrology", "unexpected payload")
            return None
        return data


async def fetch_sources_parallel(lat: float, lng: float,
                                 api_logger: Optional[ApiCallLogger] = None) -> Tuple[SourceResult, SourceResult]:
    async with ParallelAPIExecutor(api_logger=api_logger) as executor:
        return await executor.fetch_sources(lat, lng)


def fetch_sources_sync(lat: float, lng: float,
                       api_logger: Optional[ApiCallLogger] = None) -> Tuple[SourceResult, SourceResult]:
    """Sync wrapper for Flask routes."""
    return asyncio.run(fetch_sources_parallel(lat, lng, api_logger))

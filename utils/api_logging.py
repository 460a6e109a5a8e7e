"""
API call logging for the fetch layer.

Wraps a logging.Logger so callers can inject their own; the flood core
itself never logs.
"""

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


class Timing:
    elapsed_ms: Optional[float] = None


class ApiCallLogger:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger("flood.api")

    def api_request(self, url: str, params: Optional[Dict[str, Any]] = None) -> None:
        self.logger.debug(f"API Request {url} params={params}")

    def api_success(self, url: str, duration_ms: Optional[float] = None) -> None:
        if duration_ms is None:
            self.logger.info(f"API Success {url}")
        else:
            self.logger.info(f"API Success {url} ({duration_ms:.0f}ms)")

    def api_error(self, url: str, error: BaseException, duration_ms: Optional[float] = None) -> None:
        took = f" after {duration_ms:.0f}ms" if duration_ms is not None else ""
        self.logger.error(f"API Error {url}{took}: {error!r}")

    def api_fallback(self, data_type: str, reason: Optional[str] = None) -> None:
        self.logger.warning(f"Using fallback data: {data_type} (reason: {reason or 'unknown'})")

    @contextmanager
    def timed(self, context: str) -> Iterator[Timing]:
        """Logs how long the block took, on success or failure; the yielded Timing keeps it."""
        timing = Timing()
        start = time.perf_counter()
        try:
            yield timing
        except Exception:
            timing.elapsed_ms = (time.perf_counter() - start) * 1000
            self.logger.error(f"{context} failed after {timing.elapsed_ms:.0f}ms")
            raise
        timing.elapsed_ms = (time.perf_counter() - start) * 1000
        self.logger.debug(f"{context} completed in {timing.elapsed_ms:.0f}ms")

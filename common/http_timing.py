"""Shared HTTP request timing utilities for latency benchmarking."""

import json
import time
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp

JSON_HEADERS: dict[str, str] = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


@dataclass
class TimingResult:
    """Outcome of a single timed request.

    A completed round trip is a success even when the server answered with a
    non-2xx status; only transport failures carry no duration.
    """

    success: bool
    duration_ms: Optional[float] = None
    status: Optional[int] = None
    connection_ms: float = 0.0
    error: Optional[str] = None

    @classmethod
    def ok(
        cls, duration_ms: float, status: int, connection_ms: float = 0.0
    ) -> "TimingResult":
        return cls(
            success=True,
            duration_ms=duration_ms,
            status=status,
            connection_ms=connection_ms,
        )

    @classmethod
    def failed(cls, reason: str) -> "TimingResult":
        return cls(success=False, error=reason)

    @property
    def is_http_error(self) -> bool:
        """True when the round trip completed with a non-2xx status."""
        return self.status is not None and not 200 <= self.status < 300


class HttpTimingCollector:
    """Utility class for capturing connection setup time through aiohttp tracing."""

    def __init__(self) -> None:
        """Initialize HTTP timing collector."""
        self.timing: dict[str, float] = {}

    def create_trace_config(self) -> aiohttp.TraceConfig:
        """Create aiohttp trace configuration for connection timing."""
        trace_config = aiohttp.TraceConfig()

        async def on_connection_create_start(
            _session: Any, _context: Any, _params: Any
        ) -> None:
            self.timing["conn_start"] = time.perf_counter()

        async def on_connection_create_end(
            _session: Any, _context: Any, _params: Any
        ) -> None:
            self.timing["conn_end"] = time.perf_counter()

        trace_config.on_connection_create_start.append(on_connection_create_start)
        trace_config.on_connection_create_end.append(on_connection_create_end)
        return trace_config

    def get_connection_time(self) -> float:
        """Get connection establishment time in seconds."""
        if "conn_start" in self.timing and "conn_end" in self.timing:
            return self.timing["conn_end"] - self.timing["conn_start"]
        return 0.0


async def measure_rpc_request(
    url: Optional[str],
    request_payload: dict[str, Any],
    timeout: Optional[float] = None,
) -> TimingResult:
    """POST a JSON-RPC payload and measure the full round trip.

    Args:
        url: Target endpoint URL, may be unset
        request_payload: JSON-RPC request object
        timeout: Optional total timeout in seconds, aiohttp's default otherwise

    Returns:
        TimingResult: duration in milliseconds covering connection setup,
        server processing and response transfer, or the failure reason.
        The response body is read but never parsed.
    """
    if not url:
        return TimingResult.failed("Endpoint URL is not configured")

    body: str = json.dumps(request_payload)
    timing_collector = HttpTimingCollector()
    session_kwargs: dict[str, Any] = {
        "trace_configs": [timing_collector.create_trace_config()]
    }
    if timeout is not None:
        session_kwargs["timeout"] = aiohttp.ClientTimeout(total=timeout)

    try:
        async with aiohttp.ClientSession(**session_kwargs) as session:
            start_time: float = time.perf_counter()
            async with session.post(url, headers=JSON_HEADERS, data=body) as response:
                await response.read()
                response_time: float = time.perf_counter() - start_time
                status: int = response.status
    except Exception as e:
        return TimingResult.failed(f"{e.__class__.__name__}: {e!s}")

    return TimingResult.ok(
        duration_ms=response_time * 1000,
        status=status,
        connection_ms=timing_collector.get_connection_time() * 1000,
    )

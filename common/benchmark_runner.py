"""Sequential latency benchmark over JSON-RPC endpoints."""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from common.benchmark_config import BenchmarkConfig
from common.block_selector import select_block
from common.http_timing import TimingResult, measure_rpc_request
from common.report_writer import ReportWriter
from common.request_types import RpcRequestBase
from config.defaults import BenchmarkServiceConfig
from metrics.ethereum import create_requests

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResults:
    """Raw samples and mean latency per method and endpoint, in milliseconds."""

    raw: dict[str, dict[str, list[float]]] = field(default_factory=dict)
    summary: dict[str, dict[str, float]] = field(default_factory=dict)


def mean_latency(samples: Sequence[float]) -> float:
    """Arithmetic mean, NaN when no sample was collected."""
    if not samples:
        return math.nan
    return sum(samples) / len(samples)


class BenchmarkRunner:
    """Runs every request against every endpoint, one request at a time.

    Requests are never overlapped so each measurement reflects a single
    outstanding call.
    """

    def __init__(
        self,
        config: BenchmarkConfig,
        requests: Optional[Sequence[RpcRequestBase]] = None,
        writer: Optional[ReportWriter] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self.requests: list[RpcRequestBase] = list(
            requests if requests is not None else create_requests(config.block_range)
        )
        self.writer = writer
        self.rng = rng

    def _record(
        self, method: str, endpoint_name: str, iteration: int, result: TimingResult
    ) -> Optional[float]:
        """Applies the logging policy and returns the sample to keep, if any."""
        if not result.success:
            logger.warning(
                f"Error making {method} request to {endpoint_name}: {result.error}"
            )
            return None

        if result.is_http_error:
            logger.warning(
                f"{method} request to {endpoint_name} returned status {result.status}"
            )

        message = (
            f"{method} {endpoint_name} #{iteration + 1}: "
            f"{result.duration_ms:.2f} ms (connect {result.connection_ms:.2f} ms)"
        )
        if self.config.verbose:
            logger.info(message)
        else:
            logger.debug(message)
        return result.duration_ms

    async def _benchmark_endpoint(
        self, request: RpcRequestBase, endpoint_name: str, url: Optional[str]
    ) -> list[float]:
        samples: list[float] = []
        for iteration in range(self.config.iterations):
            block: int = select_block(rng=self.rng)
            result: TimingResult = await measure_rpc_request(
                url, request.build(block), timeout=self.config.request_timeout
            )
            sample = self._record(request.method, endpoint_name, iteration, result)
            if sample is not None:
                samples.append(sample)
        return samples

    async def run(self) -> BenchmarkResults:
        """Collects samples for all requests and endpoints, then writes reports."""
        results = BenchmarkResults()
        endpoints: dict[str, Optional[str]] = self.config.active_endpoints()

        if self.config.ignored_endpoints:
            ignored = ", ".join(sorted(self.config.ignored_endpoints))
            logger.info(f"Ignoring endpoints: {ignored}")

        for request in self.requests:
            method: str = request.method
            raw_by_endpoint: dict[str, list[float]] = {}
            summary_by_endpoint: dict[str, float] = {}

            for endpoint_name, url in endpoints.items():
                logger.info(f"Benchmarking {method} on {endpoint_name}...")
                samples = await self._benchmark_endpoint(request, endpoint_name, url)
                raw_by_endpoint[endpoint_name] = samples
                summary_by_endpoint[endpoint_name] = mean_latency(samples)
                logger.info(
                    f"Average {method} request time for {endpoint_name}: "
                    f"{summary_by_endpoint[endpoint_name]:.2f} ms "
                    f"({len(samples)}/{self.config.iterations} samples)"
                )

            results.raw[method] = raw_by_endpoint
            results.summary[method] = summary_by_endpoint

        if self.writer is not None:
            self.writer.write(results)

        return results


async def run_benchmark(
    methods: Sequence[RpcRequestBase],
    endpoints: dict[str, Optional[str]],
    iterations: int = BenchmarkServiceConfig.DEFAULT_ITERATIONS,
    **options: Any,
) -> BenchmarkResults:
    """Runs one benchmark and writes its reports.

    Options are the remaining BenchmarkConfig fields: ignored_endpoints,
    verbose, output_dir and request_timeout.
    """
    config = BenchmarkConfig(endpoints=dict(endpoints), iterations=iterations, **options)
    runner = BenchmarkRunner(
        config, requests=methods, writer=ReportWriter(config.output_dir)
    )
    return await runner.run()

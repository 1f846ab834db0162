"""Configuration classes for benchmark runs."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

from config.defaults import BenchmarkServiceConfig


def _parse_int(environ: Mapping[str, str], key: str, default: int) -> int:
    raw: Optional[str] = environ.get(key)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None


def _parse_optional_float(environ: Mapping[str, str], key: str) -> Optional[float]:
    raw: Optional[str] = environ.get(key)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw.strip())
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


def parse_endpoint_list(raw: Optional[str]) -> frozenset[str]:
    """Parses a comma-separated list of endpoint names."""
    if not raw:
        return frozenset()
    return frozenset(name.strip() for name in raw.split(",") if name.strip())


@dataclass
class BenchmarkConfig:
    """Settings for a single benchmark run, validated on construction."""

    endpoints: dict[str, Optional[str]]
    iterations: int = BenchmarkServiceConfig.DEFAULT_ITERATIONS
    block_range: int = BenchmarkServiceConfig.GET_LOGS_BLOCK_RANGE
    ignored_endpoints: frozenset[str] = field(default_factory=frozenset)
    verbose: bool = False
    output_dir: Path = field(default_factory=Path.cwd)
    request_timeout: Optional[float] = None

    def __post_init__(self) -> None:
        if self.iterations < 1:
            raise ValueError(f"ITERATIONS must be positive, got {self.iterations}")
        if self.block_range < 0:
            raise ValueError(
                f"ETH_GETLOGS_BLOCKRANGE must not be negative, got {self.block_range}"
            )
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise ValueError(
                f"REQUEST_TIMEOUT must be positive, got {self.request_timeout}"
            )
        self.ignored_endpoints = frozenset(self.ignored_endpoints)
        self.output_dir = Path(self.output_dir)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BenchmarkConfig":
        """Builds the configuration from environment variables."""
        env: Mapping[str, str] = os.environ if environ is None else environ

        endpoints: dict[str, Optional[str]] = {
            name: env.get(name) or None
            for name in BenchmarkServiceConfig.ENDPOINT_NAMES
        }

        return cls(
            endpoints=endpoints,
            iterations=_parse_int(
                env, "ITERATIONS", BenchmarkServiceConfig.DEFAULT_ITERATIONS
            ),
            block_range=_parse_int(
                env,
                "ETH_GETLOGS_BLOCKRANGE",
                BenchmarkServiceConfig.GET_LOGS_BLOCK_RANGE,
            ),
            ignored_endpoints=parse_endpoint_list(env.get("IGNORE_ENDPOINTS")),
            verbose=env.get("VERBOSE", "false").lower() == "true",
            output_dir=Path(env.get("BENCHMARK_OUTPUT_DIR") or Path.cwd()),
            request_timeout=_parse_optional_float(env, "REQUEST_TIMEOUT"),
        )

    def active_endpoints(self) -> dict[str, Optional[str]]:
        """Returns endpoints that are not ignored, in configuration order."""
        return {
            name: url
            for name, url in self.endpoints.items()
            if name not in self.ignored_endpoints
        }

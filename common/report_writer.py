"""Writes benchmark results to timestamped JSON files and a text report."""

import json
import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from config.defaults import ReportStorageConfig

logger: logging.Logger = logging.getLogger(__name__)


@dataclass
class ReportPaths:
    raw: Path
    summary: Path
    latest: Path


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Returns an ISO-8601 UTC timestamp with millisecond precision."""
    moment = moment or datetime.now(timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def format_latency(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return f"{value:.2f}"


def _json_safe(data: Any) -> Any:
    """Replaces NaN with None so the output stays strict JSON."""
    if isinstance(data, dict):
        return {key: _json_safe(value) for key, value in data.items()}
    if isinstance(data, list):
        return [_json_safe(value) for value in data]
    if isinstance(data, float) and math.isnan(data):
        return None
    return data


def format_text_report(summary: dict[str, dict[str, float]]) -> str:
    """Flattens summary means into one block per method."""
    blocks: list[str] = []
    for endpoints in summary.values():
        lines: list[str] = [
            f"{endpoint}: {format_latency(mean)} ms"
            for endpoint, mean in endpoints.items()
        ]
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks)


class ReportWriter:
    """Persists raw samples, summary means and the latest text report."""

    def __init__(self, output_dir: Union[str, Path]) -> None:
        self.output_dir = Path(output_dir)

    def _write_json(self, path: Path, data: dict) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(_json_safe(data), indent=2, allow_nan=False), encoding="utf-8"
        )

    def write(
        self, results: "BenchmarkResults", timestamp: Optional[str] = None  # type: ignore  # noqa: F821
    ) -> ReportPaths:
        """Writes all artifacts for one run and returns their paths."""
        timestamp = timestamp or format_timestamp()
        filename = f"{ReportStorageConfig.RESULTS_FILE_PREFIX}{timestamp}.json"

        paths = ReportPaths(
            raw=self.output_dir / ReportStorageConfig.RAW_RESULTS_DIR / filename,
            summary=self.output_dir / ReportStorageConfig.SUMMARY_RESULTS_DIR / filename,
            latest=self.output_dir / ReportStorageConfig.LATEST_RESULTS_FILENAME,
        )

        self._write_json(paths.raw, results.raw)
        logger.info(f"Raw results saved to {paths.raw}")

        self._write_json(paths.summary, results.summary)
        logger.info(f"Summary results saved to {paths.summary}")

        paths.latest.parent.mkdir(parents=True, exist_ok=True)
        paths.latest.write_text(format_text_report(results.summary), encoding="utf-8")
        logger.info(f"Latest results saved to {paths.latest}")

        return paths

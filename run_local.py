"""Run the RPC latency benchmark locally."""

import asyncio
import logging

import dotenv

from common.benchmark_config import BenchmarkConfig
from common.benchmark_runner import BenchmarkRunner
from common.report_writer import ReportWriter, format_text_report


def setup_environment() -> BenchmarkConfig:
    """Load environment and build the benchmark configuration."""
    dotenv.load_dotenv(".env")
    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
    )
    return BenchmarkConfig.from_env()


async def run(config: BenchmarkConfig) -> str:
    runner = BenchmarkRunner(config, writer=ReportWriter(config.output_dir))
    results = await runner.run()
    return format_text_report(results.summary)


def main() -> None:
    """Run all benchmarks and print the summary."""
    config = setup_environment()
    report = asyncio.run(run(config))
    print("Summary results")
    print("----------")
    print(report)


if __name__ == "__main__":
    main()

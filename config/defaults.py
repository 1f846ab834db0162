"""Default configuration."""


class BenchmarkServiceConfig:
    """Default configuration for RPC latency benchmarking."""

    ENDPOINT_NAMES = (
        "FREE_RPC",
        "OUR_NODE",
        "HYPERRPC",
        "LOCAL_PROXY",
        "BLAST",
    )

    DEFAULT_ITERATIONS = 30

    # Block selection, shifted randomly to keep provider caches out of the numbers
    SEED_BLOCK = 0x989610
    ENTROPY_WINDOW = 100_000

    # eth_getLogs settings
    GET_LOGS_BLOCK_RANGE = 10_000
    LOGS_CONTRACT_ADDRESS = "0xdAC17F958D2ee523a2206206994597C13D831ec7"  # USDT
    LOGS_TOPIC = (
        "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"  # Transfer event
    )


class ReportStorageConfig:
    """Default layout for benchmark output artifacts."""

    RAW_RESULTS_DIR = "data/raw"
    SUMMARY_RESULTS_DIR = "data"
    RESULTS_FILE_PREFIX = "results-"
    LATEST_RESULTS_FILENAME = "results.txt"


class IndexerConfig:
    """Default configuration for the event summary indexer."""

    END_BLOCK = 19_000_000
    GLOBAL_EVENTS_SUMMARY_KEY = "GlobalEventsSummary"

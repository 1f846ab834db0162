"""Ethereum JSON-RPC requests used for latency benchmarking."""

from typing import Optional

from common.request_types import RpcRequestBase
from config.defaults import BenchmarkServiceConfig


class BlockNumberRequest(RpcRequestBase):
    """Request for the eth_blockNumber method."""

    @property
    def method(self) -> str:
        return "eth_blockNumber"


class GetLogsRequest(RpcRequestBase):
    """Request for the eth_getLogs method over a fixed-size block range."""

    requires_block = True

    def __init__(
        self,
        block_range: int = BenchmarkServiceConfig.GET_LOGS_BLOCK_RANGE,
        address: str = BenchmarkServiceConfig.LOGS_CONTRACT_ADDRESS,
        topic: str = BenchmarkServiceConfig.LOGS_TOPIC,
    ) -> None:
        self.block_range = block_range
        self.address = address
        self.topic = topic

    @property
    def method(self) -> str:
        return "eth_getLogs"

    def get_params(self, block: Optional[int]) -> list:
        """Get parameters for token transfer logs starting at the given block."""
        return [
            {
                "address": self.address,
                "fromBlock": hex(block),
                "toBlock": hex(block + self.block_range),
                "topics": [self.topic],
            }
        ]


class GetBlockReceiptsRequest(RpcRequestBase):
    """Request for the eth_getBlockReceipts method."""

    requires_block = True

    @property
    def method(self) -> str:
        return "eth_getBlockReceipts"

    def get_params(self, block: Optional[int]) -> list:
        return [hex(block)]


def create_requests(block_range: int) -> list[RpcRequestBase]:
    """Creates the default benchmark requests in run order."""
    return [
        BlockNumberRequest(),
        GetLogsRequest(block_range=block_range),
        GetBlockReceiptsRequest(),
    ]

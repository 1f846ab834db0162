"""Base classes for JSON-RPC request builders."""

from abc import ABC, abstractmethod
from typing import Any, Optional


class RpcRequestBase(ABC):
    """Base class for JSON-RPC benchmark requests.

    Subclasses name the RPC method and derive its parameters from the
    block selected for the current iteration.
    """

    requires_block: bool = False

    @property
    @abstractmethod
    def method(self) -> str:
        """RPC method name to be implemented by subclasses."""
        pass

    def get_params(self, block: Optional[int]) -> list:
        """Get RPC method parameters for the given block."""
        return []

    def build(self, block: Optional[int] = None) -> dict[str, Any]:
        """Build the JSON-RPC request object."""
        if self.requires_block and block is None:
            raise ValueError(f"A block number is required for {self.method}")
        return {
            "id": 1,
            "jsonrpc": "2.0",
            "method": self.method,
            "params": self.get_params(block),
        }

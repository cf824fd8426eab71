"""JSON-RPC client wrappers for EVM chains."""

from .client import (
    BlockNotFoundError,
    ExecutionRevertedError,
    NodeUnreachableError,
    PublicClient,
    RpcError,
    RpcResponseError,
    TransactionNotFoundError,
    TransactionReceiptNotFoundError,
    UnauthorizedError,
)
from .chain_client import (
    AccountNotConfiguredError,
    ChainClient,
    ChainNotSupportedError,
    default_client,
)

__all__ = [
    "PublicClient",
    "ChainClient",
    "RpcError",
    "RpcResponseError",
    "ExecutionRevertedError",
    "NodeUnreachableError",
    "UnauthorizedError",
    "BlockNotFoundError",
    "TransactionNotFoundError",
    "TransactionReceiptNotFoundError",
    "ChainNotSupportedError",
    "AccountNotConfiguredError",
    "default_client",
]

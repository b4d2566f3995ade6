"""Ethereum JSON-RPC provider adapter."""

from .client import JsonRpcProvider
from .exceptions import (
    BlockNotFoundError,
    RpcError,
    RpcHttpError,
    RpcRateLimitError,
    RpcResponseError,
    RpcTransportError,
)

__all__ = [
    "JsonRpcProvider",
    "RpcError",
    "RpcTransportError",
    "RpcHttpError",
    "RpcRateLimitError",
    "RpcResponseError",
    "BlockNotFoundError",
]

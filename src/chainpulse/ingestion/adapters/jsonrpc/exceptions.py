"""
JSON-RPC Exception Hierarchy

Provides specific exception types for the ways an Ethereum JSON-RPC call can
fail, so the domain layer can wrap them into its own taxonomy.
"""


class RpcError(Exception):
    """Base exception for all JSON-RPC provider errors."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        status_code: int | None = None,
        code: int | None = None,
    ):
        super().__init__(message)
        self.method = method
        self.status_code = status_code
        self.code = code


class RpcTransportError(RpcError):
    """Connection, DNS or timeout failure before a response arrived."""

    pass


class RpcHttpError(RpcError):
    """Non-200 HTTP status from the RPC gateway."""

    pass


class RpcRateLimitError(RpcHttpError):
    """429 - Too many requests."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class RpcResponseError(RpcError):
    """JSON-RPC error member, or a response that is not a JSON-RPC envelope."""

    pass


class BlockNotFoundError(RpcError):
    """Requested block is unknown to the node (``null`` result)."""

    def __init__(self, message: str, height: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.height = height

"""
JSON-RPC Error Mapper

Maps HTTP status codes and JSON-RPC error members to specific exception
types, providing context-rich error messages for debugging.
"""

from typing import Any

from .exceptions import (
    RpcError,
    RpcHttpError,
    RpcRateLimitError,
    RpcResponseError,
)


class JsonRpcErrorMapper:
    """Maps failed responses to appropriate exception types."""

    @staticmethod
    def extract_error_message(response_body: Any) -> str:
        """Extract error message from response body."""
        if isinstance(response_body, str):
            return response_body
        elif isinstance(response_body, dict):
            error = response_body.get("error")
            if isinstance(error, dict):
                return error.get("message") or str(error)
            return error or response_body.get("message") or str(response_body)
        else:
            return str(response_body)

    @staticmethod
    def map_http_error(
        status_code: int,
        response_body: Any,
        method: str,
        retry_after: str | None = None,
    ) -> RpcError:
        """
        Map a non-200 HTTP status to a specific exception with context.

        Args:
            status_code: HTTP status code
            response_body: Response body (dict, str, or other)
            method: JSON-RPC method that was called
            retry_after: Retry-After header value if present

        Returns:
            Appropriate RpcHttpError subclass instance
        """
        error_msg = JsonRpcErrorMapper.extract_error_message(response_body)

        if status_code == 429:
            retry_after_int = None
            if retry_after:
                try:
                    retry_after_int = int(retry_after)
                except ValueError:
                    pass

            return RpcRateLimitError(
                f"Rate limit exceeded for {method}: {error_msg}",
                retry_after=retry_after_int,
                method=method,
                status_code=status_code,
            )
        elif status_code >= 500:
            return RpcHttpError(
                f"Server error {status_code} for {method}: {error_msg}",
                method=method,
                status_code=status_code,
            )
        else:
            return RpcHttpError(
                f"Unexpected HTTP {status_code} for {method}: {error_msg}",
                method=method,
                status_code=status_code,
            )

    @staticmethod
    def map_rpc_error(error: Any, method: str) -> RpcResponseError:
        """Map a JSON-RPC ``error`` member to RpcResponseError."""
        if isinstance(error, dict):
            code = error.get("code")
            message = error.get("message") or str(error)
        else:
            code = None
            message = str(error)
        return RpcResponseError(
            f"RPC error for {method}: {message}",
            method=method,
            status_code=200,
            code=code if isinstance(code, int) else None,
        )

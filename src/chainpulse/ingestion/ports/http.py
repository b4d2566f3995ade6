"""HTTP communication abstractions for provider adapters.

Separates HTTP transport layer from JSON-RPC semantics (envelopes, error
mapping). Allows easy mocking and swapping of HTTP implementations in tests.
"""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass
class HttpResponse:
    """HTTP response data container."""

    status_code: int
    body: Any  # JSON-decoded response body
    headers: dict[str, str]
    url: str


class IHttpClient(Protocol):
    """Abstraction for HTTP client.

    Single Responsibility: Execute HTTP requests and return responses.
    Does NOT handle:
    - JSON-RPC envelope validation
    - Error mapping
    - Retry logic
    """

    async def post(
        self,
        url: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """Execute POST request with a JSON body.

        Args:
            url: Full URL to request
            data: JSON-serializable request body
            headers: HTTP headers
            timeout: Request timeout in seconds

        Raises:
            aiohttp.ClientError / asyncio.TimeoutError: On network errors
        """
        ...

    async def close(self) -> None:
        """Release the underlying connection pool."""
        ...

"""Concrete HTTP client implementation for async requests.

Wraps aiohttp behind IHttpClient abstraction.
"""

from typing import Any

import aiohttp

from chainpulse.infrastructure.observability import get_infrastructure_logger
from chainpulse.ingestion.config.value_objects import HttpClientConfig
from chainpulse.ingestion.ports.http import HttpResponse, IHttpClient

log = get_infrastructure_logger("aiohttp-client")


class AiohttpClient(IHttpClient):
    """HTTP client implementation using aiohttp."""

    def __init__(self, config: HttpClientConfig | None = None):
        """Initialize HTTP client.

        Args:
            config: HTTP client configuration
        """
        self.config = config or HttpClientConfig()
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(
                total=self.config.timeout,
                connect=self.config.connect_timeout,
            )
            self._session = aiohttp.ClientSession(timeout=timeout)
            log.debug("http_session_opened", timeout=self.config.timeout)
        return self._session

    async def post(
        self,
        url: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> HttpResponse:
        """Execute POST request.

        Args:
            url: Full URL
            data: Request body, sent as JSON
            headers: HTTP headers
            timeout: Request timeout override

        Returns:
            HttpResponse with status, body, headers

        Raises:
            aiohttp.ClientError: On connection errors
        """
        session = await self._get_session()
        timeout_obj = aiohttp.ClientTimeout(total=timeout or self.config.timeout)

        async with session.post(
            url,
            json=data,
            headers=headers,
            timeout=timeout_obj,
            ssl=self.config.verify_ssl,
        ) as resp:
            if resp.status == 200:
                # Some RPC gateways answer with text/plain content types
                body = await resp.json(content_type=None)
            else:
                body = {"error": await resp.text()}
            return HttpResponse(
                status_code=resp.status,
                body=body,
                headers=dict(resp.headers),
                url=str(resp.url),
            )

    async def close(self) -> None:
        """Close HTTP session."""
        if self._session:
            await self._session.close()
            log.debug("http_session_closed")
            self._session = None

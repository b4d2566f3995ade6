import asyncio
import itertools
from typing import Any

import aiohttp

from chainpulse.infrastructure.observability import get_ingestion_logger
from chainpulse.ingestion.config.value_objects import JsonRpcConfig
from chainpulse.ingestion.connectors.aiohttp_client import AiohttpClient
from chainpulse.ingestion.ports.http import IHttpClient
from chainpulse.shared.models import Block, LogFilter, TransferLog

from .error_mapper import JsonRpcErrorMapper
from .exceptions import (
    BlockNotFoundError,
    RpcResponseError,
    RpcTransportError,
)
from .mappers import hex_to_int, map_block, map_log

log = get_ingestion_logger("jsonrpc-provider")


class JsonRpcProvider:
    """Ethereum JSON-RPC 2.0 implementation of IChainDataProvider.

    Single Responsibility: Turn provider operations into JSON-RPC calls and
    map results into domain records. No retries, no caching.

    Dependencies injected (not instantiated):
    - http_client: Executes HTTP requests (AiohttpClient by default)
    """

    def __init__(
        self,
        config: JsonRpcConfig,
        http_client: IHttpClient | None = None,
    ):
        self.config = config
        self.http_client = http_client or AiohttpClient(config.http_config)
        self._ids = itertools.count(1)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self) -> None:
        await self.http_client.close()

    async def call(self, method: str, params: list[Any] | None = None) -> Any:
        """Execute one JSON-RPC call and return its ``result`` member.

        Raises:
            RpcTransportError: Connection errors and timeouts
            RpcHttpError: Non-200 HTTP status
            RpcResponseError: JSON-RPC error member or malformed envelope
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": method,
            "params": params or [],
        }

        try:
            response = await self.http_client.post(
                self.config.rpc_url,
                data=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.config.http_config.timeout,
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.warning("rpc_transport_error", method=method, error=str(e))
            raise RpcTransportError(
                f"Transport failure for {method}: {e}", method=method
            ) from e
        except ValueError as e:
            # Undecodable 200 body (json.JSONDecodeError)
            log.warning("rpc_invalid_body", method=method, error=str(e))
            raise RpcResponseError(
                f"Response for {method} is not valid JSON: {e}", method=method
            ) from e

        if response.status_code != 200:
            error = JsonRpcErrorMapper.map_http_error(
                response.status_code,
                response.body,
                method,
                retry_after=response.headers.get("Retry-After"),
            )
            log.warning(
                "rpc_http_error", method=method, status_code=response.status_code
            )
            raise error

        body = response.body
        if not isinstance(body, dict) or "jsonrpc" not in body:
            raise RpcResponseError(
                f"Response for {method} is not a JSON-RPC envelope: {body!r}",
                method=method,
                status_code=response.status_code,
            )
        if body.get("error") is not None:
            error = JsonRpcErrorMapper.map_rpc_error(body["error"], method)
            log.warning("rpc_error_response", method=method, code=error.code)
            raise error

        log.debug("rpc_call_completed", method=method)
        return body.get("result")

    async def get_block_number(self) -> int:
        result = await self.call("eth_blockNumber")
        try:
            return hex_to_int(result)
        except (TypeError, ValueError) as e:
            raise RpcResponseError(
                f"eth_blockNumber returned {result!r}", method="eth_blockNumber"
            ) from e

    async def get_block(self, height: int) -> Block:
        result = await self.call("eth_getBlockByNumber", [hex(height), False])
        if result is None:
            raise BlockNotFoundError(
                f"Block {height} not found",
                height=height,
                method="eth_getBlockByNumber",
            )
        return map_block(result)

    async def get_logs(self, log_filter: LogFilter) -> list[TransferLog]:
        result = await self.call("eth_getLogs", [log_filter.to_rpc_params()])
        if not isinstance(result, list):
            raise RpcResponseError(
                f"eth_getLogs returned {type(result).__name__}, expected list",
                method="eth_getLogs",
            )
        return [map_log(entry) for entry in result]

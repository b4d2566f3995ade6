"""
Tests for the JSON-RPC provider adapter, with the HTTP client mocked out.
"""

import asyncio
import json
from unittest.mock import AsyncMock

import aiohttp
import pytest

from chainpulse.ingestion.adapters.jsonrpc import (
    BlockNotFoundError,
    JsonRpcProvider,
    RpcHttpError,
    RpcRateLimitError,
    RpcResponseError,
    RpcTransportError,
)
from chainpulse.ingestion.adapters.jsonrpc.mappers import map_block, map_log
from chainpulse.ingestion.config.value_objects import JsonRpcConfig
from chainpulse.ingestion.ports.http import HttpResponse
from chainpulse.shared.models import LogFilter
from chainpulse.transformation.abi import TRANSFER_TOPIC

RPC_URL = "https://rpc.example"
TOKEN = "0x" + "cd" * 20


def rpc_ok(result) -> HttpResponse:
    return HttpResponse(
        status_code=200,
        body={"jsonrpc": "2.0", "id": 1, "result": result},
        headers={},
        url=RPC_URL,
    )


def make_provider(*responses) -> tuple[JsonRpcProvider, AsyncMock]:
    http_client = AsyncMock()
    http_client.post = AsyncMock(side_effect=list(responses))
    provider = JsonRpcProvider(JsonRpcConfig(rpc_url=RPC_URL), http_client=http_client)
    return provider, http_client


RAW_BLOCK = {
    "number": "0x12a05f2",
    "hash": "0x" + "11" * 32,
    "timestamp": "0x65a0b4c0",
    "baseFeePerGas": "0x3b9aca00",
    "gasUsed": "0x4c4b40",
    "gasLimit": "0x989680",
    "transactions": [],
}


# ============================================================================
# Mappers
# ============================================================================


class TestMappers:
    def test_map_block_converts_hex_quantities(self):
        block = map_block(RAW_BLOCK)

        assert block.number == 0x12A05F2
        assert block.base_fee_per_gas == "1000000000"
        assert block.gas_used == "5000000"
        assert block.gas_limit == "10000000"
        assert block.timestamp == 0x65A0B4C0

    def test_map_block_without_base_fee(self):
        raw = {k: v for k, v in RAW_BLOCK.items() if k != "baseFeePerGas"}

        assert map_block(raw).base_fee_per_gas is None

    def test_map_block_keeps_unparsable_quantity_for_derivation(self):
        raw = dict(RAW_BLOCK, gasUsed="not-hex")

        assert map_block(raw).gas_used == "not-hex"

    def test_map_block_without_number_is_response_error(self):
        with pytest.raises(RpcResponseError):
            map_block({"gasUsed": "0x1", "gasLimit": "0x2"})

    def test_map_log(self):
        log = map_log(
            {
                "blockNumber": "0x10",
                "address": TOKEN,
                "topics": [TRANSFER_TOPIC, "0x" + "00" * 32, "0x" + "00" * 32],
                "data": "0x" + "00" * 31 + "64",
                "logIndex": "0x3",
                "transactionHash": "0x" + "22" * 32,
            }
        )

        assert log.block_number == 16
        assert log.log_index == 3
        assert log.topics[0] == TRANSFER_TOPIC


# ============================================================================
# Provider operations
# ============================================================================


class TestJsonRpcProvider:
    @pytest.mark.asyncio
    async def test_get_block_number(self):
        provider, http_client = make_provider(rpc_ok("0x1b4"))

        assert await provider.get_block_number() == 436

        payload = http_client.post.call_args.kwargs["data"]
        assert payload["method"] == "eth_blockNumber"
        assert payload["jsonrpc"] == "2.0"
        assert http_client.post.call_args.args[0] == RPC_URL

    @pytest.mark.asyncio
    async def test_get_block_requests_header_only(self):
        provider, http_client = make_provider(rpc_ok(RAW_BLOCK))

        block = await provider.get_block(0x12A05F2)

        payload = http_client.post.call_args.kwargs["data"]
        assert payload["method"] == "eth_getBlockByNumber"
        assert payload["params"] == ["0x12a05f2", False]
        assert block.number == 0x12A05F2

    @pytest.mark.asyncio
    async def test_unknown_block_raises_block_not_found(self):
        provider, _ = make_provider(rpc_ok(None))

        with pytest.raises(BlockNotFoundError) as exc_info:
            await provider.get_block(99)

        assert exc_info.value.height == 99

    @pytest.mark.asyncio
    async def test_get_logs_sends_filter(self):
        provider, http_client = make_provider(
            rpc_ok(
                [
                    {
                        "blockNumber": "0x64",
                        "address": TOKEN,
                        "topics": [TRANSFER_TOPIC],
                        "data": "0x" + "00" * 31 + "0a",
                    }
                ]
            )
        )
        log_filter = LogFilter(
            from_block=100, to_block=100, address=TOKEN, topics=(TRANSFER_TOPIC,)
        )

        logs = await provider.get_logs(log_filter)

        payload = http_client.post.call_args.kwargs["data"]
        assert payload["method"] == "eth_getLogs"
        assert payload["params"] == [
            {
                "fromBlock": "0x64",
                "toBlock": "0x64",
                "address": TOKEN,
                "topics": [TRANSFER_TOPIC],
            }
        ]
        assert len(logs) == 1
        assert logs[0].block_number == 100

    @pytest.mark.asyncio
    async def test_request_ids_increase(self):
        provider, http_client = make_provider(rpc_ok("0x1"), rpc_ok("0x2"))

        await provider.get_block_number()
        await provider.get_block_number()

        ids = [c.kwargs["data"]["id"] for c in http_client.post.call_args_list]
        assert ids[1] > ids[0]


# ============================================================================
# Error mapping
# ============================================================================


class TestJsonRpcErrors:
    @pytest.mark.asyncio
    async def test_rpc_error_member(self):
        provider, _ = make_provider(
            HttpResponse(
                status_code=200,
                body={
                    "jsonrpc": "2.0",
                    "id": 1,
                    "error": {"code": -32005, "message": "query returned more than 10000 results"},
                },
                headers={},
                url=RPC_URL,
            )
        )

        with pytest.raises(RpcResponseError) as exc_info:
            await provider.get_logs(LogFilter(from_block=1, to_block=1, address=TOKEN))

        assert exc_info.value.code == -32005
        assert "10000 results" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_rate_limit(self):
        provider, _ = make_provider(
            HttpResponse(
                status_code=429,
                body={"error": "Too Many Requests"},
                headers={"Retry-After": "3"},
                url=RPC_URL,
            )
        )

        with pytest.raises(RpcRateLimitError) as exc_info:
            await provider.get_block_number()

        assert exc_info.value.retry_after == 3
        assert exc_info.value.status_code == 429

    @pytest.mark.asyncio
    async def test_server_error(self):
        provider, _ = make_provider(
            HttpResponse(status_code=502, body={"error": "Bad Gateway"}, headers={}, url=RPC_URL)
        )

        with pytest.raises(RpcHttpError) as exc_info:
            await provider.get_block_number()

        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_transport_error(self):
        http_client = AsyncMock()
        http_client.post = AsyncMock(side_effect=aiohttp.ClientConnectionError("refused"))
        provider = JsonRpcProvider(JsonRpcConfig(rpc_url=RPC_URL), http_client=http_client)

        with pytest.raises(RpcTransportError):
            await provider.get_block_number()

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self):
        http_client = AsyncMock()
        http_client.post = AsyncMock(side_effect=asyncio.TimeoutError())
        provider = JsonRpcProvider(JsonRpcConfig(rpc_url=RPC_URL), http_client=http_client)

        with pytest.raises(RpcTransportError):
            await provider.get_block(1)

    @pytest.mark.asyncio
    async def test_undecodable_body_is_response_error(self):
        http_client = AsyncMock()
        http_client.post = AsyncMock(
            side_effect=json.JSONDecodeError("Expecting value", "<html>", 0)
        )
        provider = JsonRpcProvider(JsonRpcConfig(rpc_url=RPC_URL), http_client=http_client)

        with pytest.raises(RpcResponseError) as exc_info:
            await provider.get_block_number()

        assert exc_info.value.method == "eth_blockNumber"
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_non_envelope_body(self):
        provider, _ = make_provider(
            HttpResponse(status_code=200, body=["unexpected"], headers={}, url=RPC_URL)
        )

        with pytest.raises(RpcResponseError):
            await provider.get_block_number()

    @pytest.mark.asyncio
    async def test_context_manager_closes_http_client(self):
        provider, http_client = make_provider(rpc_ok("0x1"))

        async with provider as p:
            await p.get_block_number()

        http_client.close.assert_awaited_once()


def test_config_rejects_empty_url():
    with pytest.raises(ValueError):
        JsonRpcConfig(rpc_url="")

"""Map raw JSON-RPC payloads (hex quantities) to domain records."""

from typing import Any

from chainpulse.shared.models import Block, TransferLog

from .exceptions import RpcResponseError


def hex_to_int(value: Any) -> int:
    """Convert a hex quantity like ``"0x1b4"`` to int; ints pass through."""
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        return int(value, 16)
    raise ValueError(f"not a hex quantity: {value!r}")


def _quantity_to_decimal(value: Any) -> str | None:
    """Decimal string for a hex quantity.

    Values that do not parse are handed through untouched so the derivation
    layer reports them as malformed block data for the right block.
    """
    if value is None:
        return None
    try:
        return str(hex_to_int(value))
    except (TypeError, ValueError):
        return str(value)


def map_block(raw: dict[str, Any]) -> Block:
    """Build a Block from an eth_getBlockByNumber result."""
    try:
        number = hex_to_int(raw["number"])
    except (KeyError, TypeError, ValueError) as e:
        raise RpcResponseError(
            f"Block payload without a usable number: {raw!r}",
            method="eth_getBlockByNumber",
        ) from e

    timestamp = raw.get("timestamp")
    return Block(
        number=number,
        base_fee_per_gas=_quantity_to_decimal(raw.get("baseFeePerGas")),
        gas_used=_quantity_to_decimal(raw.get("gasUsed")) or "",
        gas_limit=_quantity_to_decimal(raw.get("gasLimit")) or "",
        hash=raw.get("hash"),
        timestamp=hex_to_int(timestamp) if timestamp is not None else None,
    )


def map_log(raw: dict[str, Any]) -> TransferLog:
    """Build a TransferLog from one eth_getLogs entry."""
    try:
        block_number = hex_to_int(raw["blockNumber"])
    except (KeyError, TypeError, ValueError) as e:
        raise RpcResponseError(
            f"Log payload without a usable blockNumber: {raw!r}",
            method="eth_getLogs",
        ) from e

    log_index = raw.get("logIndex")
    return TransferLog(
        block_number=block_number,
        address=raw.get("address", ""),
        topics=tuple(raw.get("topics") or ()),
        data=raw.get("data") or "0x",
        transaction_hash=raw.get("transactionHash"),
        log_index=hex_to_int(log_index) if log_index is not None else None,
    )

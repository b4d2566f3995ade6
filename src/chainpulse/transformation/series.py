"""Per-block series derived from block headers.

Pure functions: one MetricPoint per input block, same order, no state kept
between calls.
"""

from collections.abc import Sequence
from decimal import Decimal, InvalidOperation

from chainpulse.shared.exceptions import MalformedBlockData
from chainpulse.shared.models import Block, MetricPoint

WEI_PER_GWEI = Decimal(10**9)


def parse_decimal(block: Block, field: str) -> Decimal:
    """Parse a numeric block field as a finite, non-negative decimal.

    Raises:
        MalformedBlockData: Field missing, not numeric, or negative
    """
    raw = getattr(block, field)
    if raw is None or raw == "":
        raise MalformedBlockData(
            f"Block {block.number} has no {field}",
            block_number=block.number,
            field=field,
        )
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation as e:
        raise MalformedBlockData(
            f"Block {block.number} has non-numeric {field}: {raw!r}",
            block_number=block.number,
            field=field,
        ) from e
    if not value.is_finite() or value < 0:
        raise MalformedBlockData(
            f"Block {block.number} has invalid {field}: {raw!r}",
            block_number=block.number,
            field=field,
        )
    return value


def base_fee_gwei(block: Block) -> float:
    """Base fee per gas of ``block`` converted from wei to Gwei."""
    return float(parse_decimal(block, "base_fee_per_gas") / WEI_PER_GWEI)


def gas_usage_percentage(block: Block) -> float:
    """Share of the block gas limit consumed, in percent."""
    used = parse_decimal(block, "gas_used")
    limit = parse_decimal(block, "gas_limit")
    if limit == 0:
        raise MalformedBlockData(
            f"Block {block.number} has zero gas_limit",
            block_number=block.number,
            field="gas_limit",
        )
    return float(used / limit * 100)


def derive_base_fee_series(blocks: Sequence[Block]) -> list[MetricPoint]:
    """Base fee in Gwei for every block of the window."""
    return [
        MetricPoint(block_number=block.number, value=base_fee_gwei(block))
        for block in blocks
    ]


def derive_gas_usage_series(blocks: Sequence[Block]) -> list[MetricPoint]:
    """Gas utilization percentage for every block of the window."""
    return [
        MetricPoint(block_number=block.number, value=gas_usage_percentage(block))
        for block in blocks
    ]

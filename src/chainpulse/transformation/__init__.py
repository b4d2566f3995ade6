"""
Transformation layer: block window -> per-block chart series.
"""

from .abi import TRANSFER_TOPIC, decode_transfer_amount
from .series import (
    derive_base_fee_series,
    derive_gas_usage_series,
    parse_decimal,
)
from .volume import derive_volume_series, get_erc20_transfer_volume

__all__ = [
    "TRANSFER_TOPIC",
    "decode_transfer_amount",
    "parse_decimal",
    "derive_base_fee_series",
    "derive_gas_usage_series",
    "get_erc20_transfer_volume",
    "derive_volume_series",
]

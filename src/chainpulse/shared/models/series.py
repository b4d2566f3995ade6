from enum import Enum

from pydantic import BaseModel, ConfigDict


class SeriesName(str, Enum):
    """Derived per-block series shown on the dashboard."""

    BASE_FEE = "base_fee_gwei"
    GAS_USAGE = "gas_usage_pct"
    TRANSFER_VOLUME = "transfer_volume"


class MetricPoint(BaseModel):
    """One value of a derived series for one block."""

    model_config = ConfigDict(frozen=True)

    block_number: int
    value: float

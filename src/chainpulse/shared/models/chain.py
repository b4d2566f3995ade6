# chainpulse/shared/models/chain.py

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Block(BaseModel):
    """
    Finalized chain block as reported by the upstream provider.

    Numeric fee/gas fields stay decimal strings (integer wei / gas units) the
    way the provider hands them over; parsing happens in the derivation layer
    so a bad value surfaces there as MalformedBlockData.
    """

    model_config = ConfigDict(frozen=True)

    number: int = Field(..., ge=0, description="Block height")
    base_fee_per_gas: str | None = Field(default=None, description="Base fee in wei")
    gas_used: str
    gas_limit: str

    hash: str | None = Field(default=None)
    timestamp: int | None = Field(default=None)

    @field_validator("base_fee_per_gas", "gas_used", "gas_limit", mode="before")
    @classmethod
    def stringify_quantity(cls, v: Any) -> Any:
        """Accept plain ints from providers that already decoded quantities."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class TransferLog(BaseModel):
    """One emitted event matching the Transfer topic, scoped to a block and contract."""

    model_config = ConfigDict(frozen=True)

    block_number: int = Field(..., ge=0)
    address: str
    topics: tuple[str, ...] = Field(default_factory=tuple)
    data: str = Field(default="0x", description="ABI-encoded, non-indexed payload")

    transaction_hash: str | None = Field(default=None)
    log_index: int | None = Field(default=None)


class LogFilter(BaseModel):
    """Filter for an eth_getLogs query."""

    model_config = ConfigDict(frozen=True)

    from_block: int = Field(..., ge=0)
    to_block: int = Field(..., ge=0)
    address: str
    topics: tuple[str, ...] = Field(default_factory=tuple)

    def to_rpc_params(self) -> dict[str, Any]:
        """Render as the JSON-RPC filter object (hex block tags)."""
        return {
            "fromBlock": hex(self.from_block),
            "toBlock": hex(self.to_block),
            "address": self.address,
            "topics": list(self.topics),
        }

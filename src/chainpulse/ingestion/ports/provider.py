"""
Upstream chain data port.

The refresh pipeline only ever talks to the chain through these three
operations, so any RPC or indexing provider can back it.
"""

from __future__ import annotations

from typing import Protocol

from chainpulse.shared.models import Block, LogFilter, TransferLog


class IChainDataProvider(Protocol):
    """Read-only access to chain head, blocks and event logs."""

    async def get_block_number(self) -> int:
        """Return the current chain head height."""
        ...

    async def get_block(self, height: int) -> Block:
        """Return the block at ``height``; raises if unknown or not yet available."""
        ...

    async def get_logs(self, log_filter: LogFilter) -> list[TransferLog]:
        """Return the logs matching ``log_filter``."""
        ...

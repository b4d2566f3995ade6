"""
Ingestion layer: provider ports, the JSON-RPC adapter and the block window fetcher.
"""

from .block_fetcher import DEFAULT_WINDOW_SIZE, fetch_latest_blocks

__all__ = ["DEFAULT_WINDOW_SIZE", "fetch_latest_blocks"]

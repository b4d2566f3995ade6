"""
Block Fetcher
Retrieves the newest fixed-size window of blocks, oldest to newest.
"""

from chainpulse.common.utils import gather_bounded
from chainpulse.infrastructure.observability import get_ingestion_logger
from chainpulse.ingestion.ports.provider import IChainDataProvider
from chainpulse.shared.exceptions import ProviderUnavailable
from chainpulse.shared.models import Block

DEFAULT_WINDOW_SIZE = 10

log = get_ingestion_logger("block-fetcher")


async def fetch_latest_blocks(
    provider: IChainDataProvider,
    window_size: int = DEFAULT_WINDOW_SIZE,
    max_concurrency: int | None = None,
) -> list[Block]:
    """
    Fetch the newest ``window_size`` blocks in ascending height order.

    Every call re-queries the provider: head height first, then each block
    of the window concurrently. The window is all-or-nothing.

    Args:
        provider: Upstream chain data provider
        window_size: Number of blocks in the window (N)
        max_concurrency: Max block fetches in flight (default: N)

    Returns:
        Blocks with heights [H-N+1, ..., H]

    Raises:
        ProviderUnavailable: Head query or any block fetch failed
        ValueError: window_size < 1
    """
    if window_size < 1:
        raise ValueError(f"window_size must be >= 1, got {window_size}")

    try:
        head = await provider.get_block_number()
    except Exception as e:
        log.error("head_query_failed", error=str(e))
        raise ProviderUnavailable(f"Failed to fetch chain head: {e}") from e

    # Chains younger than the window yield a shorter window starting at genesis
    heights = [h for h in range(head, head - window_size, -1) if h >= 0]

    async def _fetch(height: int) -> Block:
        try:
            return await provider.get_block(height)
        except Exception as e:
            raise ProviderUnavailable(
                f"Failed to fetch block {height}: {e}", block_number=height
            ) from e

    try:
        blocks = await gather_bounded(_fetch, heights, limit=max_concurrency)
    except ProviderUnavailable as e:
        log.error("block_fetch_failed", head=head, block_number=e.block_number)
        raise

    blocks.sort(key=lambda b: b.number)
    log.info(
        "blocks_fetched",
        head=head,
        window_size=len(blocks),
        oldest=blocks[0].number,
    )
    return blocks

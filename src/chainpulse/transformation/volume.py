"""ERC-20 transfer volume per block.

A log whose payload does not decode contributes zero and processing
continues. A failed log query fails the block's figure with
VolumeFetchFailed, so zero and "unknown" are never conflated.
"""

from collections.abc import Sequence

from chainpulse.common.utils import gather_bounded
from chainpulse.infrastructure.observability import get_processing_logger
from chainpulse.ingestion.ports.provider import IChainDataProvider
from chainpulse.shared.exceptions import LogDecodeAnomaly, VolumeFetchFailed
from chainpulse.shared.models import Block, LogFilter, MetricPoint

from .abi import TRANSFER_TOPIC, decode_transfer_amount

log = get_processing_logger("transfer-volume")


def transfer_filter(block: Block, token_address: str) -> LogFilter:
    """Log filter for Transfer events of ``token_address`` within ``block``."""
    return LogFilter(
        from_block=block.number,
        to_block=block.number,
        address=token_address,
        topics=(TRANSFER_TOPIC,),
    )


async def get_erc20_transfer_volume(
    provider: IChainDataProvider,
    block: Block,
    token_address: str,
) -> float:
    """
    Sum of decoded Transfer values emitted by ``token_address`` in ``block``.

    Args:
        provider: Upstream chain data provider
        block: Block to aggregate
        token_address: ERC-20 contract address

    Returns:
        Non-negative volume, rounded to 2 decimal places

    Raises:
        VolumeFetchFailed: The log query itself failed
    """
    try:
        logs = await provider.get_logs(transfer_filter(block, token_address))
    except Exception as e:
        log.error(
            "volume_fetch_failed",
            block_number=block.number,
            token=token_address,
            error=str(e),
        )
        raise VolumeFetchFailed(
            f"Failed to fetch transfer logs for block {block.number}: {e}",
            block_number=block.number,
            token_address=token_address,
        ) from e

    total = 0
    anomalies = 0
    for entry in logs:
        try:
            total += decode_transfer_amount(entry)
        except LogDecodeAnomaly as anomaly:
            anomalies += 1
            log.warning(
                "log_decode_anomaly",
                block_number=anomaly.block_number,
                log_index=anomaly.log_index,
                data=anomaly.data,
                error=str(anomaly),
            )

    log.debug(
        "transfer_volume_aggregated",
        block_number=block.number,
        logs=len(logs),
        anomalies=anomalies,
    )
    return round(float(total), 2)


async def derive_volume_series(
    provider: IChainDataProvider,
    blocks: Sequence[Block],
    token_address: str,
    max_concurrency: int | None = None,
) -> list[MetricPoint]:
    """
    Transfer volume for every block of the window, fetched concurrently.

    Raises:
        VolumeFetchFailed: The log query for any block failed
    """

    async def _point(block: Block) -> MetricPoint:
        volume = await get_erc20_transfer_volume(provider, block, token_address)
        return MetricPoint(block_number=block.number, value=volume)

    return await gather_bounded(_point, blocks, limit=max_concurrency)

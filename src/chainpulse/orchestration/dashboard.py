"""Dashboard refresh cycle.

Builds one snapshot per refresh: the block window plus three chart panels,
each carrying its own state so one failing series does not blank the others.
The core derivation functions stay stateless; this module only sequences them.
"""

import asyncio
import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

import pandas as pd

from chainpulse.config.state import DashboardConfig
from chainpulse.infrastructure.observability import get_pipeline_logger
from chainpulse.ingestion.block_fetcher import fetch_latest_blocks
from chainpulse.ingestion.ports.provider import IChainDataProvider
from chainpulse.shared.exceptions import (
    MalformedBlockData,
    ProviderUnavailable,
    VolumeFetchFailed,
)
from chainpulse.shared.models import Block, MetricPoint, SeriesName
from chainpulse.transformation.series import (
    derive_base_fee_series,
    derive_gas_usage_series,
)
from chainpulse.transformation.volume import derive_volume_series

log = get_pipeline_logger()


class ChartState(str, Enum):
    """Render state of one chart."""

    LOADING = "loading"
    READY = "ready"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(frozen=True)
class ChartPanel:
    """One chart's series plus its render state."""

    series: SeriesName
    state: ChartState
    points: tuple[MetricPoint, ...] = ()
    error: str | None = None

    @classmethod
    def loading(cls, series: SeriesName) -> "ChartPanel":
        return cls(series=series, state=ChartState.LOADING)

    @classmethod
    def failed(cls, series: SeriesName, error: Exception | str) -> "ChartPanel":
        return cls(series=series, state=ChartState.ERROR, error=str(error))


@dataclass(frozen=True)
class DashboardSnapshot:
    """Result of one refresh cycle."""

    state: ChartState
    blocks: tuple[Block, ...] = ()
    panels: dict[SeriesName, ChartPanel] = field(default_factory=dict)
    error: str | None = None
    refreshed_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def panel(self, series: SeriesName) -> ChartPanel:
        return self.panels.get(series) or ChartPanel.loading(series)

    def to_frame(self) -> pd.DataFrame:
        """
        Ready series as a DataFrame indexed by block number.

        One column per chart in READY or EMPTY state; errored charts are left
        out rather than filled with zeros.
        """
        columns: dict[str, pd.Series] = {}
        for series, panel in self.panels.items():
            if panel.state not in (ChartState.READY, ChartState.EMPTY):
                continue
            if not panel.points:
                continue
            columns[series.value] = pd.Series(
                [p.value for p in panel.points],
                index=[p.block_number for p in panel.points],
                dtype="float64",
            )

        frame = pd.DataFrame(columns)
        frame.index.name = "block_number"
        return frame.sort_index()


def _derive_panel(
    series: SeriesName,
    derive: Callable[[list[Block]], list[MetricPoint]],
    blocks: list[Block],
) -> ChartPanel:
    try:
        points = derive(blocks)
    except MalformedBlockData as e:
        log.error(
            "series_derivation_failed",
            series=series.value,
            block_number=e.block_number,
            field=e.field,
        )
        return ChartPanel.failed(series, e)
    state = ChartState.READY if points else ChartState.EMPTY
    return ChartPanel(series=series, state=state, points=tuple(points))


async def _volume_panel(
    provider: IChainDataProvider,
    blocks: list[Block],
    token_address: str,
    max_concurrency: int | None,
) -> ChartPanel:
    series = SeriesName.TRANSFER_VOLUME
    if not token_address:
        log.info("volume_skipped", reason="no_token_address")
        return ChartPanel(series=series, state=ChartState.EMPTY)

    try:
        points = await derive_volume_series(
            provider, blocks, token_address, max_concurrency=max_concurrency
        )
    except VolumeFetchFailed as e:
        return ChartPanel.failed(series, e)

    has_data = any(p.value > 0 for p in points)
    return ChartPanel(
        series=series,
        state=ChartState.READY if has_data else ChartState.EMPTY,
        points=tuple(points),
    )


async def build_snapshot(
    provider: IChainDataProvider,
    dashboard: DashboardConfig,
    max_concurrency: int | None = None,
) -> DashboardSnapshot:
    """
    Run one refresh cycle.

    A failed window fetch puts the whole snapshot in ERROR state. Otherwise
    each chart is derived independently and carries its own state.
    """
    try:
        blocks = await fetch_latest_blocks(
            provider, dashboard.window_size, max_concurrency=max_concurrency
        )
    except ProviderUnavailable as e:
        return DashboardSnapshot(
            state=ChartState.ERROR,
            panels={s: ChartPanel.failed(s, e) for s in SeriesName},
            error=str(e),
        )

    if not blocks:
        return DashboardSnapshot(state=ChartState.EMPTY)

    panels = {
        SeriesName.BASE_FEE: _derive_panel(
            SeriesName.BASE_FEE, derive_base_fee_series, blocks
        ),
        SeriesName.GAS_USAGE: _derive_panel(
            SeriesName.GAS_USAGE, derive_gas_usage_series, blocks
        ),
        SeriesName.TRANSFER_VOLUME: await _volume_panel(
            provider, blocks, dashboard.token_address, max_concurrency
        ),
    }

    log.info(
        "snapshot_built",
        head=blocks[-1].number,
        **{s.value: p.state.value for s, p in panels.items()},
    )
    return DashboardSnapshot(
        state=ChartState.READY, blocks=tuple(blocks), panels=panels
    )


# Sync or async; an awaitable result is awaited before the next cycle
SnapshotCallback = Callable[[DashboardSnapshot], Any]


async def run_refresh_loop(
    provider: IChainDataProvider,
    dashboard: DashboardConfig,
    on_snapshot: SnapshotCallback,
    max_cycles: int | None = None,
    max_concurrency: int | None = None,
) -> int:
    """
    Build a snapshot every ``dashboard.refresh_interval`` seconds.

    Failed cycles are delivered as ERROR snapshots; the next cycle is the
    retry. Stop by cancelling the task or by passing ``max_cycles``.

    Returns:
        Number of cycles completed
    """
    cycles = 0
    while max_cycles is None or cycles < max_cycles:
        snapshot = await build_snapshot(
            provider, dashboard, max_concurrency=max_concurrency
        )
        result = on_snapshot(snapshot)
        if inspect.isawaitable(result):
            await result
        cycles += 1

        if max_cycles is not None and cycles >= max_cycles:
            break
        await asyncio.sleep(dashboard.refresh_interval)

    log.info("refresh_loop_stopped", cycles=cycles)
    return cycles

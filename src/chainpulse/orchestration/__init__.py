"""Refresh orchestration: snapshots and the periodic refresh loop."""

from .dashboard import (
    ChartPanel,
    ChartState,
    DashboardSnapshot,
    build_snapshot,
    run_refresh_loop,
)

__all__ = [
    "ChartPanel",
    "ChartState",
    "DashboardSnapshot",
    "build_snapshot",
    "run_refresh_loop",
]

"""Shared domain models."""

from chainpulse.shared.models.chain import Block, LogFilter, TransferLog
from chainpulse.shared.models.series import MetricPoint, SeriesName

__all__ = [
    # Chain records
    "Block",
    "TransferLog",
    "LogFilter",
    # Series
    "MetricPoint",
    "SeriesName",
]

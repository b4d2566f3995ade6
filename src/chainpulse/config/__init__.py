"""Configuration package for chainpulse."""

from .state import (
    ConfigLoader,
    ConfigState,
    DashboardConfig,
    LoggingConfig,
    ProviderConfig,
    get_config,
)

__all__ = [
    "ConfigLoader",
    "ConfigState",
    "DashboardConfig",
    "LoggingConfig",
    "ProviderConfig",
    "get_config",
]

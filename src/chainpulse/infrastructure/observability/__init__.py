"""
Observability for chainpulse: structlog-based structured logging with
architectural context (layer, component) bound to every entry.
"""

from .logging import (
    # Base logger factory
    get_logger,
    # Layer-specific logger factories
    get_infrastructure_logger,
    get_ingestion_logger,
    get_pipeline_logger,
    get_processing_logger,
    # Setup
    setup_logging,
)

__all__ = [
    # Setup
    "setup_logging",
    # Base
    "get_logger",
    # Layer-specific
    "get_infrastructure_logger",
    "get_ingestion_logger",
    "get_processing_logger",
    "get_pipeline_logger",
]

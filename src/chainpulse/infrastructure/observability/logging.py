"""
Structured logging infrastructure for chainpulse.
Provides consistent, machine-readable logs across the refresh pipeline.

Log Structure:
    {
        "app": "chainpulse",            # Application identifier
        "layer": "ingestion",           # Architectural layer
        "component": "block-fetcher",   # Specific component
        "module": "...",                # Python module (optional)
        "block_number": 19000000,       # Domain context
        "event": "blocks_fetched",      # What happened
        ...
    }

Architectural Layers:
    - infrastructure: Cross-cutting (config, transport)
    - ingestion: Data acquisition (JSON-RPC provider, block fetcher)
    - processing: Series derivation and log decoding
    - pipeline: Refresh loop and dashboard snapshots
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import EventDict

Layer = Literal["infrastructure", "ingestion", "processing", "pipeline"]

APP_NAME = "chainpulse"


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Add the application identifier to every log entry."""
    event_dict["app"] = APP_NAME
    return event_dict


_SEVERITIES = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


def add_severity_level(
    logger: Any, method_name: str, event_dict: EventDict
) -> EventDict:
    """Mirror the stdlib level as an upper-case ``severity`` field."""
    level = event_dict.get("level")
    if level:
        severity = str(level).upper()
        event_dict["severity"] = severity if severity in _SEVERITIES else "INFO"
    return event_dict


def setup_logging(
    level: str = "INFO",
    json_logs: bool = True,
    include_timestamp: bool = True,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: If True, output JSON. If False, use human-readable format (dev mode).
        include_timestamp: Whether to include ISO timestamps in logs

    Usage:
        >>> from chainpulse.infrastructure.observability import setup_logging
        >>> setup_logging(level="DEBUG", json_logs=False)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(log_level)

    processors = [
        structlog.contextvars.merge_contextvars,
        add_app_context,
        structlog.stdlib.add_log_level,
        add_severity_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(
    name: str | None = None,
    layer: Layer | None = None,
    component: str | None = None,
    **initial_context: Any,
) -> structlog.stdlib.BoundLogger:
    """
    Get a configured logger instance with architectural context.

    Args:
        name: Logger name (typically __name__ of the calling module)
        layer: Architectural layer (infrastructure, ingestion, processing, pipeline)
        component: Specific component within the layer
        **initial_context: Additional context key-value pairs to bind to logger

    Usage:
        >>> log = get_logger(__name__, layer="ingestion", component="jsonrpc-provider")
        >>> log.info("rpc_call_completed", method="eth_blockNumber")
    """
    context = {}
    if layer:
        context["layer"] = layer
    if component:
        context["component"] = component
    if name:
        context["module"] = name
    context.update(initial_context)

    # Lazy proxy: module-level loggers resolve against setup_logging() on first use
    return structlog.get_logger(name, **context)


# Layer loggers: one per architectural layer, named after the layer


def _layer_logger(
    layer: Layer, component: str, context: dict[str, Any]
) -> structlog.stdlib.BoundLogger:
    return get_logger(layer, layer=layer, component=component, **context)


def get_infrastructure_logger(
    component: str, **context: Any
) -> structlog.stdlib.BoundLogger:
    """Config loading and HTTP transport."""
    return _layer_logger("infrastructure", component, context)


def get_ingestion_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """
    Provider calls and block window fetches.

    Usage:
        >>> log = get_ingestion_logger("block-fetcher", window_size=10)
        >>> log.info("blocks_fetched", head=19000000)
    """
    return _layer_logger("ingestion", component, context)


def get_processing_logger(component: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """
    Series derivation and log decoding.

    Usage:
        >>> log = get_processing_logger("transfer-volume")
        >>> log.warning("log_decode_anomaly", block_number=19000000, log_index=3)
    """
    return _layer_logger("processing", component, context)


def get_pipeline_logger(
    component: str = "refresh-loop", **context: Any
) -> structlog.stdlib.BoundLogger:
    """Refresh loop and dashboard snapshots."""
    return _layer_logger("pipeline", component, context)

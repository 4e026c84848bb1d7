"""
CHASSIS - Observability Package

Structured logging for the chassis, with OpenTelemetry trace context
attached to every event so chassis logs correlate with the traces of the
host system.

Usage:
    from observability import setup_logging, get_logger

    # Initialize at application startup
    setup_logging(LoggingConfig(level="DEBUG"))

    logger = get_logger(__name__)
"""
from .logging import (
    LifecycleLogger,
    LoggingConfig,
    get_logger,
    is_configured,
    setup_logging,
    shutdown_logging,
)

__all__ = [
    "LifecycleLogger",
    "LoggingConfig",
    "get_logger",
    "is_configured",
    "setup_logging",
    "shutdown_logging",
]

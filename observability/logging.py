"""
CHASSIS - Structured Logging with Trace Context

Integrates structlog with OpenTelemetry trace context propagation, so
chassis lifecycle events (applications started and disposed, components
registered and unregistered) carry the trace_id and span_id of whatever
host operation caused them.

Usage:
    from observability.logging import setup_logging, get_logger

    # Setup at startup; otherwise the first chassis event sets up defaults
    setup_logging(LoggingConfig(level="DEBUG", json_format=True))

    logger = get_logger(__name__)
"""
from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Optional

import structlog
from opentelemetry import trace
from structlog.types import EventDict, WrappedLogger

# Global state
_configured: bool = False


@dataclass
class LoggingConfig:
    """Configuration for structured logging."""

    service_name: str = "chassis"
    level: str = field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper()
    )
    json_format: bool = field(
        default_factory=lambda: os.getenv("LOG_FORMAT", "console").lower() == "json"
    )
    environment: str = field(
        default_factory=lambda: os.getenv("ENVIRONMENT", "development")
    )


def add_trace_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor adding trace_id/span_id of the recording span, if any."""
    span = trace.get_current_span()
    if span and span.is_recording():
        ctx = span.get_span_context()
        if ctx.is_valid:
            event_dict["trace_id"] = format(ctx.trace_id, "032x")
            event_dict["span_id"] = format(ctx.span_id, "016x")
    return event_dict


def add_service_context(
    service_name: str,
    environment: str,
) -> structlog.types.Processor:
    """Create a processor stamping service name and environment on every event."""

    def processor(
        logger: WrappedLogger,
        method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        event_dict["service"] = service_name
        event_dict["environment"] = environment
        return event_dict

    return processor


def setup_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Configure structlog and the stdlib root logger.

    Calling it again after a successful setup has no effect until
    :func:`shutdown_logging` is called.
    """
    global _configured

    if _configured:
        return

    config = config or LoggingConfig()

    renderer = (
        structlog.processors.JSONRenderer()
        if config.json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            add_service_context(config.service_name, config.environment),
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            add_trace_context,
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    level = getattr(logging, config.level, logging.INFO)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    _configured = True


def is_configured() -> bool:
    """Whether :func:`setup_logging` has run since the last shutdown."""
    return _configured


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, setting up defaults on first use."""
    if not _configured:
        setup_logging()
    return structlog.get_logger(name)


def shutdown_logging() -> None:
    """Flush root handlers and restore structlog defaults."""
    global _configured

    for handler in logging.getLogger().handlers:
        handler.flush()

    structlog.reset_defaults()
    _configured = False


class LifecycleLogger:
    """
    Debug-level events for chassis lifecycle transitions.

    The underlying logger is looked up per event rather than cached, so
    reconfiguring structlog (as test log capture does) takes effect at once.
    """

    def __init__(self, name: str):
        self._name = name

    def _app(self, app_id: str) -> structlog.stdlib.BoundLogger:
        return get_logger(self._name).bind(app_id=app_id)

    def app_started(self, app_id: str, instance_id: str, depth: int) -> None:
        self._app(app_id).debug(
            "Application started", instance_id=instance_id, stack_depth=depth
        )

    def app_disposed(self, app_id: str, instance_id: str, current_id: str) -> None:
        self._app(app_id).debug(
            "Application disposed", instance_id=instance_id, current_app_id=current_id
        )

    def component_registered(self, component: str, app_id: str, count: int) -> None:
        self._app(app_id).debug(
            "Component registered", component_type=component, component_count=count
        )

    def component_unregistered(self, component: str, app_id: str, count: int) -> None:
        self._app(app_id).debug(
            "Component unregistered", component_type=component, component_count=count
        )

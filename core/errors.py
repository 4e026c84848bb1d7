"""
CHASSIS - Unified Error Handling

Error hierarchy for contract violations and configuration failures.

Every chassis error carries a stable ``error_code`` and a severity, names
the chassis operation that raised it through an optional ErrorContext,
and is recorded on the current OpenTelemetry span (if one is recording)
at construction.

Contract violations are programmer errors: they are raised synchronously at
the offending call site and are never retried or recovered internally.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Type

from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode


class ErrorSeverity(Enum):
    ERROR = "error"
    CRITICAL = "critical"  # Programming error, the caller must be fixed


@dataclass(frozen=True)
class ErrorContext:
    """Where in the chassis an error was raised."""

    operation: str
    component: str


class ChassisError(Exception):
    """
    Base exception for all chassis errors.

    Args:
        message: Human-readable description
        context: Chassis operation and component that raised the error
        severity: Overrides the class default severity
        cause: Underlying exception, if any
    """

    default_severity: ErrorSeverity = ErrorSeverity.ERROR
    error_code: str = "CHASSIS_ERROR"

    def __init__(
        self,
        message: str,
        context: Optional[ErrorContext] = None,
        severity: Optional[ErrorSeverity] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.message = message
        self.context = context
        self.severity = severity or self.default_severity
        self.cause = cause

        self._record_to_span()

    def _record_to_span(self) -> None:
        span = trace.get_current_span()
        if span and span.is_recording():
            span.set_status(Status(StatusCode.ERROR, self.message))
            span.record_exception(self)
            span.set_attribute("error.code", self.error_code)
            span.set_attribute("error.severity", self.severity.value)
            if self.context:
                span.set_attribute("error.component", self.context.component)
                span.set_attribute("error.operation", self.context.operation)

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.context:
            parts.append(f" (component: {self.context.component})")
        if self.cause:
            parts.append(f" [caused by: {self.cause}]")
        return "".join(parts)


class ChassisConfigError(ChassisError, ValueError):
    """Configuration content or a process setting could not be used."""

    error_code = "CONFIG_ERROR"
    default_severity = ErrorSeverity.CRITICAL

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        actual_value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.config_key = config_key
        self.actual_value = actual_value


class ContractViolationError(ChassisError):
    """A caller broke an API contract. Never recoverable at runtime."""

    error_code = "CONTRACT_VIOLATION"
    default_severity = ErrorSeverity.CRITICAL


class ArgumentKindError(ContractViolationError, TypeError):
    """An argument is not one of the accepted shapes."""

    error_code = "ARGUMENT_KIND"

    def __init__(
        self,
        message: str,
        accepted: Sequence[str] = (),
        actual_value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.accepted = tuple(accepted)
        self.actual_value = actual_value


class InvalidTypeError(ContractViolationError, TypeError):
    """A value is not an instance of any of the expected types."""

    error_code = "INVALID_TYPE"

    def __init__(
        self,
        message: str,
        expected_types: Sequence[Type] = (),
        actual_value: Any = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.expected_types = tuple(expected_types)
        self.actual_value = actual_value


class DirectorDepthError(ContractViolationError, RecursionError):
    """The director chain is deeper than the configured bound."""

    error_code = "DIRECTOR_DEPTH"

    def __init__(
        self,
        message: str,
        max_depth: Optional[int] = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.max_depth = max_depth

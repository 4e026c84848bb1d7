"""
CHASSIS - Contract Validation Utilities

Fail-fast guards used at API boundaries. Each guard returns the checked
value unchanged so it can be used inline in assignments:

    self._config = require_instance(cfg, Configuration, "cfg")
"""

from __future__ import annotations

from typing import Any, Optional, Tuple, Type, TypeVar

from core.errors import ErrorContext, InvalidTypeError

T = TypeVar("T")


def describe_type(value: Any) -> str:
    """Short human-readable description of a value's type."""
    if value is None:
        return "None"
    cls = type(value)
    if cls.__module__ in ("builtins", "__builtin__"):
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def _type_names(types: Tuple[Type, ...]) -> str:
    return " | ".join(t.__name__ for t in types)


def require_instance(
    value: Any,
    expected: Type[T],
    name: Optional[str] = None,
    context: Optional[ErrorContext] = None,
) -> T:
    """
    Ensure ``value`` is an instance of ``expected``.

    ``context`` names the chassis operation performing the check and is
    attached to the raised error.

    Raises:
        InvalidTypeError: If the value is of any other type
    """
    if not isinstance(value, expected):
        label = name or "value"
        raise InvalidTypeError(
            f"`{label}` must be of type `{expected.__name__}`, "
            f"got `{describe_type(value)}`",
            expected_types=(expected,),
            actual_value=value,
            context=context,
        )
    return value


def require_instance_of_either(
    value: Any,
    *expected: Type,
    name: Optional[str] = None,
    context: Optional[ErrorContext] = None,
) -> Any:
    """
    Ensure ``value`` is an instance of at least one of ``expected``.

    Raises:
        InvalidTypeError: If the value matches none of the types
    """
    if not expected:
        raise ValueError("At least one expected type is required")

    if not isinstance(value, expected):
        label = name or "value"
        raise InvalidTypeError(
            f"`{label}` must be of either type `{_type_names(expected)}`, "
            f"got `{describe_type(value)}`",
            expected_types=expected,
            actual_value=value,
            context=context,
        )
    return value

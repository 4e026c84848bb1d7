"""
CHASSIS - Core Module

Foundational pieces shared by every other chassis package:
- Unified error handling (contract violations, configuration errors)
- Fail-fast contract validation guards

Each module here is free of dependencies on other chassis packages, making
it the stable base everything else builds upon.

Usage:
    from core import (
        ChassisError, ContractViolationError, ArgumentKindError,
        require_instance, require_instance_of_either,
    )
"""

from core.errors import (
    ChassisError,
    ChassisConfigError,
    ContractViolationError,
    ArgumentKindError,
    InvalidTypeError,
    DirectorDepthError,
    ErrorContext,
    ErrorSeverity,
)
from core.validation import (
    describe_type,
    require_instance,
    require_instance_of_either,
)

__all__ = [
    # Errors
    "ChassisError",
    "ChassisConfigError",
    "ContractViolationError",
    "ArgumentKindError",
    "InvalidTypeError",
    "DirectorDepthError",
    "ErrorContext",
    "ErrorSeverity",
    # Validation
    "describe_type",
    "require_instance",
    "require_instance_of_either",
]

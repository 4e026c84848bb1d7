"""
CHASSIS - Configuration

Process-level settings for the chassis itself.
Uses environment variables with sensible defaults.

These settings are distinct from the per-application configuration tree
(see ``conf``), which every Application receives at construction. Only
variables the chassis owns are read here; deployment-wide variables such as
``ENVIRONMENT`` or ``LOG_LEVEL`` belong to the logging setup.
"""
import os
from dataclasses import dataclass, field
from typing import Optional

from dotenv import load_dotenv

from core.errors import ChassisConfigError, ErrorContext

# Load environment variables from .env file
load_dotenv()

DEFAULT_MAX_DIRECTOR_DEPTH = 1024
MAX_DIRECTOR_DEPTH_VAR = "CHASSIS_MAX_DIRECTOR_DEPTH"

_SETTINGS = ErrorContext(operation="read_settings", component="config")


def _depth_from_env() -> int:
    raw = os.getenv(MAX_DIRECTOR_DEPTH_VAR)
    if raw is None or not raw.strip():
        return DEFAULT_MAX_DIRECTOR_DEPTH
    try:
        return int(raw)
    except ValueError as e:
        raise ChassisConfigError(
            f"{MAX_DIRECTOR_DEPTH_VAR} must be an integer, got {raw!r}",
            config_key=MAX_DIRECTOR_DEPTH_VAR,
            actual_value=raw,
            context=_SETTINGS,
            cause=e,
        ) from e


@dataclass(frozen=True)
class Config:
    """Chassis process settings."""

    # Upper bound for the director chain walk performed when a component is constructed
    max_director_depth: int = field(default_factory=_depth_from_env)

    def __post_init__(self):
        if self.max_director_depth < 1:
            raise ChassisConfigError(
                f"max_director_depth must be positive, got {self.max_director_depth}",
                config_key=MAX_DIRECTOR_DEPTH_VAR,
                actual_value=self.max_director_depth,
                context=_SETTINGS,
            )


# Singleton configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create configuration singleton."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reload_config() -> Config:
    """Re-read settings from the environment (and ``.env``)."""
    global _config
    load_dotenv()
    _config = Config()
    return _config

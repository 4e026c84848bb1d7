"""
CHASSIS - Configuration Tree Package

Usage:
    from conf import Configuration, ConfigNode

    cfg = Configuration({"id": "billing", "envName": "prod"})
    cfg.root.get_string("envName", "local")
"""

from conf.coercion import TRUISMS, as_bool, as_string
from conf.configuration import ConfigNode, Configuration

__all__ = [
    "ConfigNode",
    "Configuration",
    "TRUISMS",
    "as_bool",
    "as_string",
]

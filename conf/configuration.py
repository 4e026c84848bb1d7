"""
CHASSIS - Configuration Tree

A read-only tree of configuration sections built from either a plain
mapping or a JSON object string. Applications read their identity settings
from the root node through type-coercing accessors:

    cfg = Configuration('{"id": "billing", "isTest": "yes"}')
    cfg.root.get_string("id", "#0")   # "billing"
    cfg.root.get_bool("isTest")       # True
"""

from __future__ import annotations

import copy
import json
from typing import Any, Dict, Iterator, Mapping, Optional, Union

from conf.coercion import as_bool, as_string
from core.errors import ChassisConfigError, ErrorContext, InvalidTypeError
from core.validation import describe_type

_LOAD = ErrorContext(operation="load", component="configuration")


class ConfigNode:
    """A section of a :class:`Configuration` tree."""

    __slots__ = ("_configuration", "_name", "_data", "_parent")

    def __init__(
        self,
        configuration: "Configuration",
        name: str,
        data: Mapping[str, Any],
        parent: Optional["ConfigNode"] = None,
    ):
        self._configuration = configuration
        self._name = name
        self._data = data
        self._parent = parent

    @property
    def configuration(self) -> "Configuration":
        """The configuration this node belongs to."""
        return self._configuration

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> Optional["ConfigNode"]:
        return self._parent

    @property
    def is_root(self) -> bool:
        return self._parent is None

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def get(self, key: str, default: Any = None) -> Any:
        """Raw value stored under ``key``."""
        return self._data.get(key, default)

    def get_string(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Value under ``key`` coerced to a string.

        Missing keys, None and non-scalar values yield ``default``.
        """
        value = as_string(self._data.get(key))
        return default if value is None else value

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Value under ``key`` coerced to a bool, ``default`` when missing."""
        value = self._data.get(key)
        if value is None:
            return default
        return as_bool(value)

    def node(self, key: str) -> Optional["ConfigNode"]:
        """Child section under ``key``, or None if it is absent or not a section."""
        value = self._data.get(key)
        if not isinstance(value, Mapping):
            return None
        return ConfigNode(self._configuration, key, value, self)

    def __repr__(self) -> str:
        return f"ConfigNode(name={self._name!r}, keys={list(self._data)!r})"


class Configuration:
    """
    Owns configuration content and exposes it as a :class:`ConfigNode` tree.

    Args:
        content: A JSON object string or a mapping. The mapping is deep
            copied, so later changes to the caller's data are not observed.

    Raises:
        ChassisConfigError: If the string is not valid JSON or is not an object
        InvalidTypeError: If content is neither a string nor a mapping
    """

    ROOT_NAME = "root"

    def __init__(self, content: Union[str, Mapping[str, Any]]):
        if isinstance(content, str):
            data = self._parse_json(content)
        elif isinstance(content, Mapping):
            data = copy.deepcopy(dict(content))
        else:
            raise InvalidTypeError(
                "Configuration content must be a JSON string or a mapping, "
                f"got `{describe_type(content)}`",
                expected_types=(str, Mapping),
                actual_value=content,
                context=_LOAD,
            )

        self._data: Dict[str, Any] = data
        self._root = ConfigNode(self, self.ROOT_NAME, self._data)

    @staticmethod
    def _parse_json(text: str) -> Dict[str, Any]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ChassisConfigError(
                f"Configuration content is not valid JSON: {e.msg} "
                f"(line {e.lineno}, column {e.colno})",
                actual_value=text,
                cause=e,
                context=_LOAD,
            ) from e

        if not isinstance(data, dict):
            raise ChassisConfigError(
                f"Configuration JSON must be an object, got `{type(data).__name__}`",
                actual_value=text,
                context=_LOAD,
            )
        return data

    @property
    def root(self) -> ConfigNode:
        """Root section of the tree."""
        return self._root

    @property
    def content(self) -> Dict[str, Any]:
        """Deep copy of the underlying data."""
        return copy.deepcopy(self._data)

    def __repr__(self) -> str:
        return f"Configuration(keys={list(self._data)!r})"

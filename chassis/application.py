"""
CHASSIS - Application

The root of the ownership tree. An Application carries identity metadata
read from its configuration, owns that configuration exclusively, and is
bound to the DirectorRegistry its components register into.

Architecture:
    application(cfg) -> Configuration -> Application -> ApplicationStack
                                              |
                                              +-> DirectorRegistry <- ApplicationComponent

Current application:
    Constructing an Application pushes it onto the process-wide
    ApplicationStack, shadowing whatever was current. Disposing it removes
    it again, so a nested construction/disposal pair restores the outer
    application. When the stack is empty, NopApplication stands in, so
    ``Application.instance()`` never returns None.

    Prefer passing the Application explicitly (components already reach it
    through ``component.app``); ``Application.instance()`` is a fallback for
    call sites that cannot thread it through.

Usage:
    with application({"id": "billing", "envName": "prod"}) as app:
        assert Application.instance() is app
    assert Application.instance() is NopApplication.instance()
"""
from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, ClassVar, List, Mapping, Optional
from uuid import uuid4

from chassis.disposable import Disposable
from chassis.registry import DirectorRegistry, get_registry
from conf.configuration import ConfigNode, Configuration
from core.errors import ArgumentKindError, ErrorContext
from core.validation import describe_type, require_instance
from observability.logging import LifecycleLogger

if TYPE_CHECKING:
    from chassis.component import ApplicationComponent

_lifecycle = LifecycleLogger("chassis.application")

DEFAULT_APP_ID = "#0"
DEFAULT_COPYRIGHT = "2023 Azist Group"
DEFAULT_ENV_NAME = "local"

ACCEPTED_CONFIG_SHAPES = (
    "plain mapping",
    "JSON string",
    "Configuration",
    "ConfigNode",
)


class ApplicationStack:
    """
    Ordered set of live Applications; the last one is current.

    An Application is pushed on construction and removed (by identity) on
    disposal. Removing by identity rather than popping the top means an
    out-of-order disposal never leaves an already-disposed Application
    current.
    """

    def __init__(self) -> None:
        self._apps: List["Application"] = []
        self._lock = threading.RLock()

    def push(self, app: "Application") -> int:
        """Make ``app`` current. Returns the new stack depth."""
        with self._lock:
            self._apps.append(app)
            return len(self._apps)

    def remove(self, app: "Application") -> bool:
        """Remove ``app``. Returns False if it was not on the stack."""
        with self._lock:
            for i in range(len(self._apps) - 1, -1, -1):
                if self._apps[i] is app:
                    del self._apps[i]
                    return True
            return False

    @property
    def current(self) -> Optional["Application"]:
        with self._lock:
            return self._apps[-1] if self._apps else None

    def snapshot(self) -> List["Application"]:
        """Copy of the stack, oldest first."""
        with self._lock:
            return list(self._apps)

    def __len__(self) -> int:
        with self._lock:
            return len(self._apps)


# Process-wide instance stack
_stack = ApplicationStack()


def get_application_stack() -> ApplicationStack:
    """The process-wide instance stack."""
    return _stack


class Application(Disposable):
    """
    Base application chassis.

    Args:
        cfg: Configuration the application owns from now on
        registry: Registry for this application's components. Defaults to
            the process registry from :func:`get_registry`.

    Raises:
        InvalidTypeError: If ``cfg`` is not a Configuration
    """

    @classmethod
    def instance(cls) -> "Application":
        """
        The most recently constructed, not yet disposed Application, or the
        NopApplication singleton when there is none.
        """
        return _stack.current or NopApplication.instance()

    def __init__(
        self,
        cfg: Configuration,
        registry: Optional[DirectorRegistry] = None,
    ):
        super().__init__()
        context = ErrorContext(operation="create_application", component=type(self).__name__)
        self._config = require_instance(cfg, Configuration, "cfg", context=context)
        if registry is not None:
            require_instance(registry, DirectorRegistry, "registry", context=context)
        self._registry = registry if registry is not None else get_registry()

        root = cfg.root

        self._instance_id = str(uuid4())
        self._start_time = datetime.now(timezone.utc)

        self._id = root.get_string("id", DEFAULT_APP_ID)
        self._name = root.get_string("name", self._id)
        self._description = root.get_string("description", self._id)
        self._copyright = root.get_string("copyright", DEFAULT_COPYRIGHT)
        self._env_name = root.get_string("envName", DEFAULT_ENV_NAME)
        self._is_test = root.get_bool("isTest", False)

        self._enter_stack()

    def _enter_stack(self) -> None:
        depth = _stack.push(self)
        _lifecycle.app_started(self._id, self._instance_id, depth)

    def _on_dispose(self) -> None:
        _stack.remove(self)
        _lifecycle.app_disposed(self._id, self._instance_id, Application.instance().id)

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def id(self) -> str:
        """Short application id."""
        return self._id

    @property
    def config(self) -> Configuration:
        return self._config

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return self._description

    @property
    def copyright(self) -> str:
        return self._copyright

    @property
    def env_name(self) -> str:
        """Environment name, e.g. "local" or "prod"."""
        return self._env_name

    @property
    def is_test(self) -> bool:
        return self._is_test

    @property
    def instance_id(self) -> str:
        """GUID assigned at construction."""
        return self._instance_id

    @property
    def start_time(self) -> datetime:
        """UTC timestamp captured at construction."""
        return self._start_time

    @property
    def is_current(self) -> bool:
        return Application.instance() is self

    # -------------------------------------------------------------------------
    # Component tree
    # -------------------------------------------------------------------------

    @property
    def registry(self) -> DirectorRegistry:
        return self._registry

    @property
    def components(self) -> List["ApplicationComponent"]:
        """All components directed by this app, directly or through other components."""
        return self._registry.all_components(self)

    @property
    def root_components(self) -> List["ApplicationComponent"]:
        """Top-level components directed by this app directly."""
        return self._registry.root_components(self)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self._id!r}, env_name={self._env_name!r}, "
            f"instance_id={self._instance_id!r}, disposed={self.is_disposed})"
        )


_NOP_CONTENT = {
    "id": "NOP",
    "name": "NOP",
    "description": "Nop application",
    "envName": "local",
}


class NopApplication(Application):
    """
    Application which does nothing, standing in when no real application
    is current.

    It is created lazily, once, and is never pushed onto the instance stack.
    Components may be attached to it like to any other application, but
    disposing it is a no-op: it never reports itself disposed.
    """

    _instance: ClassVar[Optional["NopApplication"]] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def instance(cls) -> "NopApplication":
        if NopApplication._instance is None:
            with NopApplication._instance_lock:
                if NopApplication._instance is None:
                    NopApplication._instance = NopApplication()
        return NopApplication._instance

    @classmethod
    def _release(cls) -> None:
        """Forget the singleton; the next instance() call builds a new one."""
        with NopApplication._instance_lock:
            NopApplication._instance = None

    def __init__(self) -> None:
        super().__init__(Configuration(_NOP_CONTENT))

    def _enter_stack(self) -> None:
        pass

    def dispose(self) -> None:
        pass


def application(
    cfg: Any = None,
    registry: Optional[DirectorRegistry] = None,
) -> Application:
    """
    Create a new Application from a plain mapping, a JSON string, a
    Configuration or a ConfigNode. None is treated as an empty mapping.

    Args:
        cfg: Configuration source
        registry: Optional registry to bind the application to

    Raises:
        ArgumentKindError: If ``cfg`` is of any other kind
        ChassisConfigError: If a JSON string cannot be parsed into an object
    """
    if cfg is None:
        cfg = {}

    if isinstance(cfg, str):
        cfg = Configuration(cfg)
    elif isinstance(cfg, ConfigNode):
        cfg = cfg.configuration
    elif isinstance(cfg, Mapping):
        cfg = Configuration(cfg)
    elif not isinstance(cfg, Configuration):
        raise ArgumentKindError(
            "Must pass either (a) plain mapping, or (b) JSON string, or "
            "(c) Configuration, or (d) ConfigNode instance into "
            f"`application(cfg)` factory function, got `{describe_type(cfg)}`",
            accepted=ACCEPTED_CONFIG_SHAPES,
            actual_value=cfg,
            context=ErrorContext(operation="application", component="factory"),
        )

    return Application(cfg, registry=registry)

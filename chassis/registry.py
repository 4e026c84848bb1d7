"""
CHASSIS - Director Registry

Maps each Application (keyed by identity) to the ordered list of
ApplicationComponents it directs, directly or through other components.
Components insert themselves on construction and remove themselves on
disposal; the registry never creates or disposes components itself.

The registry is an ordinary service object. An Application is bound to one
registry at construction (injected, or the process default returned by
:func:`get_registry`), and every component of that Application registers
into it. Tests create a fresh registry per case so no state leaks between
them.

Usage:
    registry = DirectorRegistry()
    app = Application(Configuration({}), registry=registry)
    svc = MyComponent(app)
    registry.all_components(app)    # [svc]
    registry.root_components(app)   # [svc]
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from core.errors import ErrorContext
from core.validation import require_instance
from observability.logging import LifecycleLogger

if TYPE_CHECKING:
    from chassis.application import Application
    from chassis.component import ApplicationComponent

_lifecycle = LifecycleLogger("chassis.registry")

# Process default registry
_registry: Optional["DirectorRegistry"] = None
_registry_lock = threading.Lock()


def _require_app(app: Any, operation: str) -> "Application":
    from chassis.application import Application

    return require_instance(
        app, Application, "app", context=ErrorContext(operation=operation, component="registry")
    )


class DirectorRegistry:
    """
    Identity-keyed map of Application -> ordered component list.

    All operations are synchronous and serialized by a re-entrant lock, so
    register/unregister calls from different threads cannot interleave and
    corrupt list ordering.
    """

    def __init__(self) -> None:
        self._entries: Dict["Application", List["ApplicationComponent"]] = {}
        self._lock = threading.RLock()

    def register(self, app: "Application", component: "ApplicationComponent") -> None:
        """Append ``component`` to ``app``'s list, creating the list if absent."""
        _require_app(app, "register")
        with self._lock:
            clist = self._entries.setdefault(app, [])
            clist.append(component)
            count = len(clist)
        _lifecycle.component_registered(type(component).__name__, app.id, count)

    def unregister(self, app: "Application", component: "ApplicationComponent") -> None:
        """
        Remove ``component`` from ``app``'s list.

        The entry for ``app`` is deleted once its list is empty. Removing a
        component that is not registered is a no-op.
        """
        _require_app(app, "unregister")
        with self._lock:
            clist = self._entries.get(app)
            if clist is None:
                return
            for i, c in enumerate(clist):
                if c is component:
                    del clist[i]
                    break
            else:
                return
            count = len(clist)
            if count == 0:
                del self._entries[app]
        _lifecycle.component_unregistered(type(component).__name__, app.id, count)

    def all_components(self, app: "Application") -> List["ApplicationComponent"]:
        """Shallow copy of every component of ``app``, or an empty list."""
        _require_app(app, "all_components")
        with self._lock:
            clist = self._entries.get(app)
            return list(clist) if clist is not None else []

    def root_components(self, app: "Application") -> List["ApplicationComponent"]:
        """Components directed by ``app`` itself rather than by another component."""
        return self.directed_by(app, app)

    def directed_by(self, app: "Application", director: Any) -> List["ApplicationComponent"]:
        """Components of ``app`` whose director is exactly ``director``."""
        return [c for c in self.all_components(app) if c.director is director]

    def has_entry(self, app: "Application") -> bool:
        """True if ``app`` currently has at least one registered component."""
        _require_app(app, "has_entry")
        with self._lock:
            return app in self._entries

    def clear(self) -> None:
        """Forget every entry. Registered components are not disposed."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        """Number of applications with at least one component."""
        with self._lock:
            return len(self._entries)

    def __repr__(self) -> str:
        with self._lock:
            total = sum(len(v) for v in self._entries.values())
            return f"DirectorRegistry(apps={len(self._entries)}, components={total})"


def get_registry() -> DirectorRegistry:
    """Get or create the process default registry."""
    global _registry
    if _registry is None:
        with _registry_lock:
            if _registry is None:
                _registry = DirectorRegistry()
    return _registry


def set_registry(registry: Optional[DirectorRegistry]) -> None:
    """
    Replace the process default registry.

    Passing None releases it; the next :func:`get_registry` call creates a
    fresh one. Applications already bound to the previous registry keep it.
    """
    global _registry
    if registry is not None:
        require_instance(
            registry, DirectorRegistry, "registry",
            context=ErrorContext(operation="set_registry", component="registry"),
        )
    with _registry_lock:
        _registry = registry

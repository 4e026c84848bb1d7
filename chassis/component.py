"""
CHASSIS - Application Components

Components form trees under an Application: each component is directed
either by the Application itself or by another component, and the whole
tree is registered flat in the application's DirectorRegistry.

    app
     +-- cache      (director = app, a root component)
     |    +-- evictor (director = cache)
     +-- arena      (director = app)

A component registers itself on construction and unregisters on disposal.
Disposal does not cascade by default: children of a disposed component
stay registered and still resolve their ``app``; disposing them is the
caller's job. Subclasses that own their children outright can opt into
cascading with ``cascade_dispose = True``.
"""
from __future__ import annotations

from typing import Any, ClassVar, List, Union

from chassis.application import Application
from chassis.disposable import Disposable
from chassis.registry import DirectorRegistry
from config import get_config
from core.errors import DirectorDepthError, ErrorContext
from core.validation import require_instance, require_instance_of_either

Director = Union[Application, "ApplicationComponent"]


class ApplicationComponent(Disposable):
    """
    Base class for components working under an Application, directly or
    through another component.

    Args:
        director: The Application or ApplicationComponent directing this one.
            Fixed for the component's lifetime.

    Raises:
        InvalidTypeError: If ``director`` is neither kind
        DirectorDepthError: If the director chain exceeds the configured bound
    """

    # Dispose directed components (deepest first) before this one
    cascade_dispose: ClassVar[bool] = False

    def __init__(self, director: Director):
        super().__init__()
        context = ErrorContext(operation="create_component", component=type(self).__name__)
        self._director = require_instance_of_either(
            director, Application, ApplicationComponent, name="director", context=context
        )
        self._app = self._resolve_app(get_config().max_director_depth, context)
        self._registry: DirectorRegistry = self._app.registry
        self._registry.register(self._app, self)

    @property
    def director(self) -> Director:
        """The component or app which directs (owns) this component."""
        return self._director

    @property
    def is_directed_by_app(self) -> bool:
        """True when directed by the Application itself rather than another component."""
        return isinstance(self._director, Application)

    @property
    def app(self) -> Application:
        """The Application this component is directed by, directly or indirectly."""
        return self._app

    def _resolve_app(self, max_depth: int, context: ErrorContext) -> Application:
        node: Any = self._director
        depth = 1
        while not isinstance(node, Application):
            if depth >= max_depth:
                raise DirectorDepthError(
                    f"Director chain of `{type(self).__name__}` is deeper than {max_depth}",
                    max_depth=max_depth,
                    context=context,
                )
            node = node.director
            depth += 1
        return node

    @property
    def directed_components(self) -> List["ApplicationComponent"]:
        """Components directed by this one."""
        return self._registry.directed_by(self._app, self)

    def _on_dispose(self) -> None:
        if self.cascade_dispose:
            self._dispose_directed()
        self._registry.unregister(self._app, self)

    def _dispose_directed(self) -> None:
        for child in reversed(self.directed_components):
            child._dispose_directed()
            child.dispose()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(director={type(self._director).__name__}, disposed={self.is_disposed})"


class Arena(ApplicationComponent):
    """
    The virtual "stage" an application deals with at the present moment.

    An arena is always a root component: its director must be the
    Application itself.
    """

    def __init__(self, app: Application):
        require_instance(
            app, Application, "app",
            context=ErrorContext(operation="create_component", component=type(self).__name__),
        )
        super().__init__(app)

"""
CHASSIS - Runtime Lifecycle

Explicit setup and teardown of the process-wide chassis state: the default
DirectorRegistry, the application instance stack and the NopApplication
singleton. Nothing is initialized implicitly beyond lazy defaults, so a
host (or a test fixture) can bracket its use of the chassis:

    registry = init_chassis()
    try:
        ...
    finally:
        shutdown_chassis()
"""
from __future__ import annotations

from typing import Optional

from chassis.application import Application, NopApplication, get_application_stack
from chassis.registry import DirectorRegistry, get_registry, set_registry
from config import reload_config


def init_chassis(registry: Optional[DirectorRegistry] = None) -> DirectorRegistry:
    """
    Install ``registry`` (or a fresh one) as the process default registry
    and re-read the chassis process settings.

    The NopApplication singleton is released as well, so the next one is
    bound to the newly installed registry. Live applications keep the
    registry they were constructed with.

    Returns:
        The installed registry
    """
    reload_config()
    set_registry(registry if registry is not None else DirectorRegistry())
    NopApplication._release()
    return get_registry()


def shutdown_chassis() -> None:
    """
    Dispose every live application (newest first), clear and release the
    process registry, and forget the NopApplication singleton.

    Components are not disposed; their registry entries are simply dropped.
    """
    stack = get_application_stack()
    for app in reversed(stack.snapshot()):
        app.dispose()

    get_registry().clear()
    set_registry(None)
    NopApplication._release()


def current_app() -> Application:
    """
    The current Application, or NopApplication when none is live.

    A fallback for call sites that cannot receive the Application
    explicitly.
    """
    return Application.instance()

"""
CHASSIS - Application Chassis

A process-wide ownership tree: which Application is current, which
components it directs, and a deterministic disposal protocol over both.

Provides:
- Disposal protocol (IDisposable, DisposalState, Disposable)
- Director registry (DirectorRegistry, get_registry, set_registry)
- Application root with a nested instance stack (Application, NopApplication)
- Component trees (ApplicationComponent, Arena)
- Explicit runtime lifecycle (init_chassis, shutdown_chassis)

Usage:
    from chassis import application, ApplicationComponent

    class Cache(ApplicationComponent):
        pass

    with application({"id": "billing"}) as app:
        with Cache(app) as cache:
            assert app.root_components == [cache]
"""

from chassis.disposable import (
    IDisposable,
    DisposalState,
    Disposable,
)
from chassis.registry import (
    DirectorRegistry,
    get_registry,
    set_registry,
)
from chassis.application import (
    Application,
    ApplicationStack,
    NopApplication,
    application,
    get_application_stack,
    ACCEPTED_CONFIG_SHAPES,
    DEFAULT_APP_ID,
    DEFAULT_COPYRIGHT,
    DEFAULT_ENV_NAME,
)
from chassis.component import (
    ApplicationComponent,
    Arena,
)
from chassis.runtime import (
    current_app,
    init_chassis,
    shutdown_chassis,
)

__all__ = [
    # Disposal protocol
    "IDisposable",
    "DisposalState",
    "Disposable",
    # Registry
    "DirectorRegistry",
    "get_registry",
    "set_registry",
    # Application
    "Application",
    "ApplicationStack",
    "NopApplication",
    "application",
    "get_application_stack",
    "ACCEPTED_CONFIG_SHAPES",
    "DEFAULT_APP_ID",
    "DEFAULT_COPYRIGHT",
    "DEFAULT_ENV_NAME",
    # Components
    "ApplicationComponent",
    "Arena",
    # Runtime
    "current_app",
    "init_chassis",
    "shutdown_chassis",
]

__version__ = "1.0.0"

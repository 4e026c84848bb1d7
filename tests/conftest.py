"""
CHASSIS - Test Configuration

Pytest fixtures and configuration for all tests.
"""
import pytest
from typing import Any, Callable, Dict, Generator

from chassis import (
    Application,
    DirectorRegistry,
    application,
    init_chassis,
    shutdown_chassis,
)


@pytest.fixture(autouse=True)
def chassis_registry() -> Generator[DirectorRegistry, None, None]:
    """Fresh process registry and empty instance stack for every test."""
    registry = init_chassis()
    yield registry
    shutdown_chassis()


@pytest.fixture
def sample_config() -> Dict[str, Any]:
    """Sample application configuration."""
    return {
        "id": "billing",
        "name": "Billing",
        "description": "Billing service",
        "copyright": "2024 Example Corp",
        "envName": "prod",
        "isTest": "yes",
    }


@pytest.fixture
def make_app() -> Generator[Callable[..., Application], None, None]:
    """Factory for applications that are disposed after the test."""
    created = []

    def factory(cfg: Any = None, **kwargs: Any) -> Application:
        app = application(cfg, **kwargs)
        created.append(app)
        return app

    yield factory

    for app in reversed(created):
        app.dispose()


@pytest.fixture
def app(make_app) -> Application:
    """A live application with id "X"."""
    return make_app({"id": "X"})

"""
Tests for chassis/registry.py - Director Registry.

Covers:
- register / unregister ordering and empty-entry cleanup
- copy semantics of query results
- root and director-relative queries
- contract checks on the application key
- process default registry accessors
"""
import threading

import pytest

from chassis import (
    ApplicationComponent,
    DirectorRegistry,
    application,
    get_registry,
    set_registry,
)
from core.errors import ContractViolationError, InvalidTypeError


class Service(ApplicationComponent):
    pass


@pytest.fixture
def registry() -> DirectorRegistry:
    return DirectorRegistry()


@pytest.fixture
def isolated_app(registry, make_app):
    """Application bound to its own registry instead of the process one."""
    return make_app({"id": "iso"}, registry=registry)


class TestRegistration:
    """Tests for component self-registration."""

    def test_components_registered_in_construction_order(self, isolated_app, registry):
        a = Service(isolated_app)
        b = Service(isolated_app)
        c = Service(a)
        assert registry.all_components(isolated_app) == [a, b, c]

    def test_unregister_removes_entry_when_empty(self, isolated_app, registry):
        svc = Service(isolated_app)
        assert registry.has_entry(isolated_app)
        assert len(registry) == 1

        svc.dispose()

        assert not registry.has_entry(isolated_app)
        assert len(registry) == 0
        assert registry.all_components(isolated_app) == []

    def test_unregister_unknown_component_is_noop(self, isolated_app, registry):
        svc = Service(isolated_app)
        registry.unregister(isolated_app, svc)
        # Already gone: a second removal changes nothing
        registry.unregister(isolated_app, svc)
        assert registry.all_components(isolated_app) == []

    def test_unregister_removes_only_that_component(self, isolated_app, registry):
        a = Service(isolated_app)
        b = Service(isolated_app)
        a.dispose()
        assert registry.all_components(isolated_app) == [b]

    def test_isolated_registry_does_not_touch_process_registry(self, isolated_app, chassis_registry):
        Service(isolated_app)
        assert len(chassis_registry) == 0


class TestQueries:
    """Tests for query shapes."""

    def test_all_components_returns_copy(self, isolated_app, registry):
        svc = Service(isolated_app)
        listing = registry.all_components(isolated_app)
        listing.clear()
        assert registry.all_components(isolated_app) == [svc]

    def test_all_components_empty_for_unknown_app(self, isolated_app, registry):
        assert registry.all_components(isolated_app) == []

    def test_root_components_only_depth_one(self, isolated_app, registry):
        c1 = Service(isolated_app)
        c2 = Service(c1)
        Service(c2)
        assert registry.root_components(isolated_app) == [c1]

    def test_directed_by_component(self, isolated_app, registry):
        c1 = Service(isolated_app)
        c2 = Service(c1)
        c3 = Service(c1)
        Service(c2)
        assert registry.directed_by(isolated_app, c1) == [c2, c3]

    def test_repr_counts(self, isolated_app, registry):
        c1 = Service(isolated_app)
        Service(c1)
        assert repr(registry) == "DirectorRegistry(apps=1, components=2)"


class TestContract:
    """Non-Application keys are contract violations."""

    @pytest.mark.parametrize("bad", [None, "app", 42, object()])
    def test_queries_reject_non_application(self, registry, bad):
        with pytest.raises(InvalidTypeError):
            registry.all_components(bad)
        with pytest.raises(InvalidTypeError):
            registry.root_components(bad)
        with pytest.raises(ContractViolationError):
            registry.has_entry(bad)

    def test_violation_names_operation(self, registry):
        with pytest.raises(InvalidTypeError) as exc_info:
            registry.register("app", object())
        assert exc_info.value.context.operation == "register"
        assert exc_info.value.context.component == "registry"

    def test_register_rejects_non_application(self, registry, isolated_app):
        svc = Service(isolated_app)
        with pytest.raises(TypeError):
            registry.register(svc, svc)


class TestProcessRegistry:
    """Tests for get_registry / set_registry."""

    def test_get_registry_is_stable(self, chassis_registry):
        assert get_registry() is chassis_registry
        assert get_registry() is get_registry()

    def test_set_registry_replaces_default(self):
        replacement = DirectorRegistry()
        set_registry(replacement)
        assert get_registry() is replacement

    def test_set_none_releases_default(self, chassis_registry):
        set_registry(None)
        fresh = get_registry()
        assert fresh is not chassis_registry
        assert isinstance(fresh, DirectorRegistry)

    def test_set_registry_rejects_other_types(self):
        with pytest.raises(InvalidTypeError):
            set_registry({})

    def test_application_binds_to_default_at_construction(self, make_app, chassis_registry):
        app = make_app()
        assert app.registry is chassis_registry

        set_registry(DirectorRegistry())
        svc = Service(app)
        assert chassis_registry.all_components(app) == [svc]
        assert get_registry().all_components(app) == []


class TestConcurrency:
    """Registry operations serialize under concurrent use."""

    def test_parallel_registration(self, isolated_app, registry):
        per_thread = 200
        created = []
        lock = threading.Lock()

        def worker():
            local = [Service(isolated_app) for _ in range(per_thread)]
            with lock:
                created.extend(local)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(registry.all_components(isolated_app)) == 4 * per_thread

        for svc in created:
            svc.dispose()
        assert not registry.has_entry(isolated_app)

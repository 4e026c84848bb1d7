"""
Property-Based Tests for Chassis Invariants

Tests the application instance stack and the director registry against
simple reference models under arbitrary construction and disposal orders.
"""
from hypothesis import HealthCheck, given, settings, strategies as st
from hypothesis.stateful import RuleBasedStateMachine, invariant, precondition, rule

from chassis import (
    Application,
    ApplicationComponent,
    DirectorRegistry,
    NopApplication,
    application,
    init_chassis,
    shutdown_chassis,
)


class TestInstanceStackProperties:
    """Disposal order never exposes a disposed application."""

    @given(st.integers(min_value=1, max_value=8).flatmap(
        lambda n: st.permutations(list(range(n)))
    ))
    @settings(max_examples=100, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_any_disposal_order(self, order):
        init_chassis()
        try:
            apps = [application({"id": f"app-{i}"}) for i in range(len(order))]
            live = list(apps)

            for index in order:
                apps[index].dispose()
                live.remove(apps[index])

                current = Application.instance()
                if live:
                    assert current is live[-1]
                else:
                    assert current is NopApplication.instance()
                assert not current.is_disposed
        finally:
            shutdown_chassis()

    @given(st.integers(min_value=0, max_value=10))
    @settings(max_examples=50, suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_nested_blocks_restore(self, depth):
        init_chassis()
        try:
            def nest(level, outer):
                if level == depth:
                    return
                with application({"id": f"level-{level}"}) as app:
                    assert Application.instance() is app
                    nest(level + 1, app)
                    assert Application.instance() is app
                assert Application.instance() is outer

            nest(0, NopApplication.instance())
        finally:
            shutdown_chassis()


class ChassisMachine(RuleBasedStateMachine):
    """Stateful testing of applications and their component trees."""

    def __init__(self):
        super().__init__()
        init_chassis()
        self.registry = DirectorRegistry()
        self.apps = []
        self.live_apps = []
        self.components = []
        # app -> component list in registration order
        self.model = {}

    def teardown(self):
        shutdown_chassis()

    @rule()
    def create_app(self):
        app = application({"id": f"app-{len(self.apps)}"}, registry=self.registry)
        self.apps.append(app)
        self.live_apps.append(app)

    @precondition(lambda self: self.apps)
    @rule(data=st.data())
    def dispose_app(self, data):
        app = data.draw(st.sampled_from(self.apps))
        app.dispose()
        if app in self.live_apps:
            self.live_apps.remove(app)

    @precondition(lambda self: self.apps)
    @rule(data=st.data())
    def create_root_component(self, data):
        app = data.draw(st.sampled_from(self.apps))
        component = ApplicationComponent(app)
        self.components.append(component)
        self.model.setdefault(app, []).append(component)

    @precondition(lambda self: self.components)
    @rule(data=st.data())
    def create_child_component(self, data):
        director = data.draw(st.sampled_from(self.components))
        component = ApplicationComponent(director)
        self.components.append(component)
        self.model.setdefault(director.app, []).append(component)

    @precondition(lambda self: self.components)
    @rule(data=st.data())
    def dispose_component(self, data):
        component = data.draw(st.sampled_from(self.components))
        registered = self.model.get(component.app, [])
        if component in registered:
            registered.remove(component)
        component.dispose()

    @invariant()
    def current_is_latest_live_app(self):
        expected = self.live_apps[-1] if self.live_apps else NopApplication.instance()
        assert Application.instance() is expected

    @invariant()
    def registry_matches_model(self):
        for app in self.apps:
            expected = self.model.get(app, [])
            assert self.registry.all_components(app) == expected
            assert self.registry.has_entry(app) == bool(expected)

    @invariant()
    def root_components_are_depth_one(self):
        for app in self.apps:
            for component in self.registry.root_components(app):
                assert component.director is app

    @invariant()
    def every_component_resolves_its_app(self):
        for component in self.components:
            node = component
            while not isinstance(node, Application):
                node = node.director
            assert component.app is node


TestChassisMachine = ChassisMachine.TestCase
TestChassisMachine.settings = settings(
    max_examples=50,
    stateful_step_count=30,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

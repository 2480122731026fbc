"""Tests for make, implicit bindings, autowiring and tag lookup."""

import types

import pytest

from appwire.app import App
from appwire.exceptions import (
    AppwireCircularDependencyError,
    AppwireDependencyNotFoundError,
    AppwireModuleNotFoundError,
)
from appwire.options import AppSettings
from tests.fixtures import services
from tests.fixtures.services import Config, Mailer, Point, Report


class TestAutowiring:
    def test_parameters_resolve_from_container_by_name(self, app: App) -> None:
        app.instance("x", 1)
        app.instance("y", 2)
        app.bind("point", "tests.fixtures.services:Point")

        point = app.make("point")

        assert isinstance(point, Point)
        assert (point.x, point.y) == (1, 2)

    def test_explicit_argument_overrides_container_binding(self, app: App) -> None:
        app.instance("x", 1)
        app.instance("y", 2)
        app.bind("point", "tests.fixtures.services:Point")

        point = app.make("point", {"x": 5})

        assert (point.x, point.y) == (5, 2)

    def test_falsy_explicit_arguments_are_used(self, app: App) -> None:
        app.instance("x", 1)
        app.instance("y", 2)
        app.bind("point", "tests.fixtures.services:Point")

        point = app.make("point", {"x": 0, "y": None})

        assert (point.x, point.y) == (0, None)

    def test_dependencies_resolve_recursively(self, app: App) -> None:
        app.bind("config", "tests.fixtures.services:Config")
        app.bind("mailer", "tests.fixtures.services:Mailer")

        mailer = app.make("mailer")

        assert isinstance(mailer, Mailer)
        assert isinstance(mailer.config, Config)
        assert mailer.transport == "smtp"

    def test_parameter_default_used_when_unbound(self, app: App) -> None:
        app.bind("config", "tests.fixtures.services:Config")
        app.bind("mailer", "tests.fixtures.services:Mailer")
        app.instance("transport", "sendmail")

        assert app.make("mailer").transport == "sendmail"

    def test_missing_dependency_names_parameter_and_abstract(self, app: App) -> None:
        app.instance("x", 1)
        app.bind("point", "tests.fixtures.services:Point")

        with pytest.raises(AppwireDependencyNotFoundError, match="'y' for 'point'") as exc_info:
            app.make("point")

        assert exc_info.value.dependency == "y"
        assert exc_info.value.abstract == "point"

    def test_keyword_only_parameters_are_passed_by_keyword(self, app: App) -> None:
        app.bind("point", "tests.fixtures.services:Point")
        app.bind("report", "tests.fixtures.services:Report")
        app.associate("point", {"x": 1, "y": 2})
        app.associate("report", {"title": "Weekly"})

        report = app.make("report")

        assert isinstance(report, Report)
        assert report.title == "Weekly"
        assert (report.point.x, report.point.y) == (1, 2)

    def test_constructor_without_parameters(self, app: App) -> None:
        app.bind("config", "tests.fixtures.services:Config")

        assert app.make("config").values == {"name": "appwire"}

    def test_function_target_is_autowired(self, app: App) -> None:
        app.instance("first", "a")
        app.instance("second", "b")
        app.bind("pair", "tests.fixtures.services:build_pair")

        assert app.make("pair") == ("a", "b")

    def test_module_target_is_returned_as_is(self, app: App) -> None:
        app.bind("services", "tests.fixtures.services")

        assert app.make("services") is services

    def test_non_callable_target_is_returned_as_is(self, app: App) -> None:
        app.bind("label", "tests.fixtures.services:LABEL")

        assert app.make("label") == "static-label"

    def test_dotted_attribute_path(self, app: App) -> None:
        app.bind("config", "tests.fixtures.services.Config")

        assert isinstance(app.make("config"), Config)

    def test_unloadable_target_fails_on_resolution(self, app: App) -> None:
        app.bind("ghost", "tests.fixtures.missing_module:Ghost")

        with pytest.raises(AppwireModuleNotFoundError, match="tests.fixtures.missing_module:Ghost"):
            app.make("ghost")


class TestImplicitBinding:
    def test_unbound_importable_abstract_is_bound(self, app: App) -> None:
        assert app.has("tests.fixtures.services:Config") is False

        config = app.make("tests.fixtures.services:Config")

        assert isinstance(config, Config)
        assert app.has("tests.fixtures.services:Config") is True

    def test_unbound_module_abstract_returns_module(self, app: App) -> None:
        module = app.make("tests.fixtures.services")

        assert isinstance(module, types.ModuleType)

    def test_unknown_abstract_raises_and_does_not_mutate(self, app: App) -> None:
        bindings_before = list(app.container)

        with pytest.raises(AppwireModuleNotFoundError, match="no_such_module_for_appwire"):
            app.make("no_such_module_for_appwire")

        assert list(app.container) == bindings_before
        assert app.has("no_such_module_for_appwire") is False

    def test_relative_abstract_raises_module_not_found(self, app: App) -> None:
        with pytest.raises(AppwireModuleNotFoundError, match=r"\.relative_service"):
            app.make(".relative_service")

        assert app.has(".relative_service") is False

    def test_implicit_binding_is_permanent_after_failure(self, app: App) -> None:
        with pytest.raises(AppwireDependencyNotFoundError):
            app.make("tests.fixtures.services:Point")

        assert app.has("tests.fixtures.services:Point") is True


class TestCallSyntax:
    def test_call_is_make(self, app: App) -> None:
        app.bind("greeting", lambda arguments: f"hi {arguments.get('name', 'you')}")

        assert app("greeting") == "hi you"
        assert app("greeting", {"name": "Ada"}) == "hi Ada"


class TestMakeByTag:
    def test_resolves_tagged_abstracts_in_registration_order(self, app: App) -> None:
        app.bind("sms", lambda: "sms", tags=["notifiers"])
        app.bind("db", lambda: "db")
        app.instance("mail", "mail", tags=["notifiers"])
        app.singleton("push", lambda: "push", tags=["notifiers"])

        assert app.make_by_tag("notifiers") == ["sms", "mail", "push"]

    def test_returns_empty_list_when_nothing_matches(self, app: App) -> None:
        app.bind("db", lambda: "db")

        assert app.make_by_tag("notifiers") == []


class TestCycleDetection:
    def test_cycle_raises_with_chain(self, app: App) -> None:
        app.bind("chicken", "tests.fixtures.services:Chicken")
        app.bind("egg", "tests.fixtures.services:Egg")

        with pytest.raises(AppwireCircularDependencyError) as exc_info:
            app.make("chicken")

        assert exc_info.value.chain == ["chicken", "egg", "chicken"]
        assert "chicken -> egg -> chicken" in str(exc_info.value)

    def test_resolution_stack_is_cleared_after_failure(self, app: App) -> None:
        app.bind("chicken", "tests.fixtures.services:Chicken")
        app.bind("egg", "tests.fixtures.services:Egg")

        with pytest.raises(AppwireCircularDependencyError):
            app.make("chicken")

        app.instance("egg", "boiled")
        assert app.make("chicken").egg == "boiled"

    def test_same_dependency_twice_is_not_a_cycle(self, app: App) -> None:
        app.bind("shared", lambda: object())
        app.bind("pair", "tests.fixtures.services:build_pair")
        app.bind("first", lambda: app.make("shared"))
        app.bind("second", lambda: app.make("shared"))

        first, second = app.make("pair")

        assert first is not second

    def test_cycle_detection_can_be_disabled(self) -> None:
        app = App({"detect_cycles": False}, settings=AppSettings.model_construct())
        app.bind("chicken", "tests.fixtures.services:Chicken")
        app.bind("egg", "tests.fixtures.services:Egg")

        with pytest.raises(RecursionError):
            app.make("chicken")

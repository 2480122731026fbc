from __future__ import annotations

from typing import Any

import pytest

from appwire import App, AppState, ServiceProvider

pytest_plugins = ["appwire.integrations.pytest_plugin"]

stopped: list[str] = []


class _StoppingProvider(ServiceProvider):
    def register(self, app: App) -> None:
        app.instance("clock", "tick")

    def down(self, app: App) -> None:
        stopped.append("clock")


@pytest.fixture()
def appwire_options() -> dict[str, Any]:
    return {"user_providers": [_StoppingProvider]}


def test_fixture_provides_unbooted_app(appwire_app: App) -> None:
    assert isinstance(appwire_app, App)
    assert appwire_app.state is AppState.UNBOOTED


def test_fixture_uses_overridden_options(appwire_app: App) -> None:
    appwire_app.boot()

    assert appwire_app.make("clock") == "tick"


def test_booted_app_was_shut_down_on_teardown() -> None:
    assert stopped == ["clock"]

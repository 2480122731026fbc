from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from appwire.app import App
from appwire.lifecycle import AppState
from appwire.options import AppSettings


@pytest.fixture()
def appwire_options() -> dict[str, Any]:
    """Return the options used to build ``appwire_app``.

    Override this fixture to add providers or required modules. The default
    keeps the built-in providers and no user providers.
    """
    return {}


@pytest.fixture()
def appwire_app(appwire_options: dict[str, Any]) -> Iterator[App]:
    """Create a per-test application, not booted.

    Environment variables are ignored so tests do not depend on the shell
    they run in. If the test boots the application, it is shut down on
    teardown.

    Yields:
        A new ``App`` instance.

    """
    app = App(appwire_options, settings=AppSettings.model_construct())
    yield app
    if app.state is AppState.BOOTED:
        app.down()

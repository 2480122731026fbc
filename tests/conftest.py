"""Shared pytest fixtures for appwire tests."""

import pytest

from appwire.app import App
from appwire.container import Container
from appwire.options import AppSettings
from tests.fixtures import providers


@pytest.fixture()
def app() -> App:
    """Application isolated from ``APPWIRE_*`` environment variables."""
    return App(settings=AppSettings.model_construct())


@pytest.fixture()
def container() -> Container:
    return Container()


@pytest.fixture(autouse=True)
def _reset_provider_calls() -> None:
    providers.calls.clear()

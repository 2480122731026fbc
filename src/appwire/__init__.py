from appwire.app import App
from appwire.container import Binding, Container
from appwire.exceptions import (
    AppwireAbstractNotFoundError,
    AppwireCircularDependencyError,
    AppwireDependencyNotFoundError,
    AppwireError,
    AppwireInvalidBindingError,
    AppwireInvalidOptionsError,
    AppwireLifecycleError,
    AppwireModuleNotFoundError,
    AppwireStartupError,
)
from appwire.lifecycle import AppState
from appwire.options import AppOptions, AppSettings, Options
from appwire.providers import AppProvider, ServiceProvider

__all__ = [
    "App",
    "AppOptions",
    "AppProvider",
    "AppSettings",
    "AppState",
    "AppwireAbstractNotFoundError",
    "AppwireCircularDependencyError",
    "AppwireDependencyNotFoundError",
    "AppwireError",
    "AppwireInvalidBindingError",
    "AppwireInvalidOptionsError",
    "AppwireLifecycleError",
    "AppwireModuleNotFoundError",
    "AppwireStartupError",
    "Binding",
    "Container",
    "Options",
    "ServiceProvider",
]

from __future__ import annotations

import inspect
from enum import Enum
from typing import TYPE_CHECKING, Any

from appwire.resolver import load_target

if TYPE_CHECKING:
    from appwire.app import App


class ProviderPhase(str, Enum):
    """Lifecycle methods a provider may expose."""

    REGISTER = "register"
    """Add bindings. Runs for every provider before any ``boot``."""

    BOOT = "boot"
    """Start side effects. Every binding is registered by then."""

    DOWN = "down"
    """Release side effects when the application shuts down."""


class ServiceProvider:
    """Base class for service providers with no-op lifecycle methods.

    Subclassing is optional: ``App`` accepts any object exposing some of
    ``register(app)``, ``boot(app)`` and ``down(app)`` and skips the phases a
    provider does not implement.
    """

    def register(self, app: App) -> None:
        """Bind services into ``app``."""

    def boot(self, app: App) -> None:
        """Run startup work. All providers have registered at this point."""

    def down(self, app: App) -> None:
        """Run shutdown work."""


class AppProvider(ServiceProvider):
    """Bind the application itself as ``"app"``.

    Lets autowired constructors declare an ``app`` parameter.
    """

    def register(self, app: App) -> None:
        app.instance("app", app)


def load_provider(entry: Any) -> Any:
    """Turn an options entry into a provider object.

    Import-path strings are loaded first. Classes are instantiated without
    arguments. Any other value is used as given.
    """
    provider = load_target(entry) if isinstance(entry, str) else entry
    if inspect.isclass(provider):
        return provider()
    return provider


def get_phase_method(provider: Any, phase: ProviderPhase) -> Any | None:
    """Return the callable implementing ``phase`` on ``provider``, if any."""
    method = getattr(provider, phase.value, None)
    return method if callable(method) else None


__all__ = [
    "AppProvider",
    "ProviderPhase",
    "ServiceProvider",
    "get_phase_method",
    "load_provider",
]

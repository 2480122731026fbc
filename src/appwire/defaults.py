from typing import Any

from appwire.providers import AppProvider

DEFAULT_PROVIDERS: list[Any] = [AppProvider]
"""Built-in providers registered before any user provider."""

DEFAULT_OPTIONS: dict[str, Any] = {
    "providers": DEFAULT_PROVIDERS,
    "user_providers": [],
    "required_modules": {},
    "detect_cycles": True,
}

OPTIONS_ABSTRACT = "options"
"""Abstract under which every ``App`` binds its ``Options`` service."""

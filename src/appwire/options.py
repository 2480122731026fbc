from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from appwire.defaults import DEFAULT_OPTIONS
from appwire.exceptions import AppwireInvalidOptionsError

logger = logging.getLogger(__name__)


class AppOptions(BaseModel):
    """Validated application options read during the provider lifecycle."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    providers: list[Any] = Field(default_factory=list)
    """Built-in providers. Registered and booted before user providers."""

    user_providers: list[Any] = Field(default_factory=list)
    """User providers. May override built-in bindings."""

    required_modules: dict[str, str] = Field(default_factory=dict)
    """Import path to error message, checked by ``App.start``."""

    detect_cycles: bool = True
    """Raise on circular dependencies instead of recursing until ``RecursionError``."""


class AppSettings(BaseSettings):
    """Environment overrides for ``AppOptions``.

    Variables use the ``APPWIRE_`` prefix, for example
    ``APPWIRE_USER_PROVIDERS='["myapp.providers:MailProvider"]'`` or
    ``APPWIRE_DETECT_CYCLES=false``.
    """

    model_config = SettingsConfigDict(env_prefix="APPWIRE_")

    user_providers: list[str] = Field(default_factory=list)
    required_modules: dict[str, str] = Field(default_factory=dict)
    detect_cycles: bool = True


class Options:
    """Options service bound as the ``"options"`` abstract."""

    def __init__(self, options: AppOptions) -> None:
        self._options = options

    def get(self) -> AppOptions:
        return self._options

    def __repr__(self) -> str:
        return f"Options({self._options!r})"


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into a copy of ``base``.

    Nested mappings merge recursively, every other value in ``override``
    replaces the one in ``base``.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def build_options(
    options: AppOptions | Mapping[str, Any] | None = None,
    settings: AppSettings | None = None,
) -> AppOptions:
    """Resolve options from defaults, environment settings and explicit values.

    An ``AppOptions`` instance is used as given. Mappings are merged over the
    environment settings, which are merged over ``DEFAULT_OPTIONS``.

    Raises:
        AppwireInvalidOptionsError: If the merged payload fails validation.

    """
    if isinstance(options, AppOptions):
        return options

    if settings is None:
        settings = AppSettings()

    merged = deep_merge(DEFAULT_OPTIONS, settings.model_dump(exclude_unset=True))
    merged = deep_merge(merged, options or {})
    try:
        resolved = AppOptions.model_validate(merged)
    except ValidationError as e:
        raise AppwireInvalidOptionsError(str(e)) from e

    logger.debug(
        "Resolved options: providers=%d user_providers=%d required_modules=%d",
        len(resolved.providers),
        len(resolved.user_providers),
        len(resolved.required_modules),
    )
    return resolved


__all__ = ["AppOptions", "AppSettings", "Options", "build_options", "deep_merge"]

from __future__ import annotations

from enum import Enum


class AppState(Enum):
    """Lifecycle state of an ``App``. Transitions only move forward."""

    UNBOOTED = "unbooted"
    """Bindings may be registered, no provider has run."""

    BOOTED = "booted"
    """Every provider has registered and booted."""

    DOWN = "down"
    """Every provider has been torn down."""

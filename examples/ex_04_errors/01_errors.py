"""Errors: missing modules, missing dependencies and cycles.

Every failure aborts the resolution that triggered it and names what was
missing.
"""

from __future__ import annotations

from typing import Any

from appwire import (
    App,
    AppwireCircularDependencyError,
    AppwireDependencyNotFoundError,
    AppwireModuleNotFoundError,
    AppwireStartupError,
)


class Mailer:
    def __init__(self, transport: Any) -> None:
        self.transport = transport


class Chicken:
    def __init__(self, egg: Any) -> None:
        self.egg = egg


class Egg:
    def __init__(self, chicken: Any) -> None:
        self.chicken = chicken


def main() -> None:
    app = App({"required_modules": {"appwire_missing_extension": "Extension is required"}})

    try:
        app.make("not_a_module")
    except AppwireModuleNotFoundError as error:
        print(error)  # => Could not load module 'not_a_module'.
    print(f"bound={app.has('not_a_module')}")  # => bound=False

    app.bind("mailer", "__main__:Mailer")
    try:
        app.make("mailer")
    except AppwireDependencyNotFoundError as error:
        print(error)  # => Could not find 'transport' for 'mailer'.

    app.bind("chicken", "__main__:Chicken")
    app.bind("egg", "__main__:Egg")
    try:
        app.make("chicken")
    except AppwireCircularDependencyError as error:
        print(error)  # => Circular dependency detected: chicken -> egg -> chicken

    try:
        app.start()
    except AppwireStartupError as error:
        print(error)  # => Extension is required


if __name__ == "__main__":
    main()

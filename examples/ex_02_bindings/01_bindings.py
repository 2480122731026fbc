"""Binding verbs: transient, singleton, instance, conditional and tagged.

Singletons are built on first resolution and then ignore arguments.
``bind_if`` and ``singleton_if`` keep whatever was registered first.
"""

from __future__ import annotations

from typing import Any

from appwire import App


class Clock:
    def __init__(self, zone: str = "UTC") -> None:
        self.zone = zone


def main() -> None:
    app = App()

    app.bind("transient", lambda: object())
    print(f"transient_new={app.make('transient') is not app.make('transient')}")  # => transient_new=True

    app.singleton("clock", "__main__:Clock")
    first = app.make("clock", {"zone": "CET"})
    second = app.make("clock", {"zone": "PST"})
    print(f"singleton_same={first is second} zone={second.zone}")  # => singleton_same=True zone=CET

    app.instance("settings", {"debug": True})
    print(f"instance={app.make('settings')}")  # => instance={'debug': True}

    app.bind_if("greeting", lambda: "package default")
    app.bind_if("greeting", lambda: "ignored")
    print(f"bind_if={app.make('greeting')}")  # => bind_if=package default

    def notifier(name: str) -> Any:
        return lambda arguments: f"{name}:{arguments.get('to', 'all')}"

    app.bind("sms", notifier("sms"), tags=["notifiers"])
    app.bind("mail", notifier("mail"), tags=["notifiers"])
    print(f"tagged={app.make_by_tag('notifiers')}")  # => tagged=['sms:all', 'mail:all']


if __name__ == "__main__":
    main()

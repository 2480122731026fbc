"""Service providers: register everything, then boot everything.

Built-in providers register before user providers, and no provider boots
before every provider has registered. A user provider can therefore override
a built-in binding, and any ``boot`` can use any binding.
"""

from __future__ import annotations

from appwire import App, ServiceProvider

events: list[str] = []


class MailProvider(ServiceProvider):
    def register(self, app: App) -> None:
        events.append("mail.register")
        app.bind("transport", lambda: "smtp")

    def boot(self, app: App) -> None:
        events.append(f"mail.boot transport={app.make('transport')}")


class UserProvider(ServiceProvider):
    def register(self, app: App) -> None:
        events.append("user.register")
        app.bind("transport", lambda: "sendmail")

    def boot(self, app: App) -> None:
        events.append("user.boot")

    def down(self, app: App) -> None:
        events.append("user.down")


def main() -> None:
    app = App({"providers": [MailProvider], "user_providers": [UserProvider]})
    app.start()
    print(f"state={app.state.value}")  # => state=booted
    print(f"events={events}")  # => events=['mail.register', 'user.register', 'mail.boot transport=sendmail', 'user.boot']

    events.clear()
    app.down()
    print(f"state={app.state.value}")  # => state=down
    print(f"events={events}")  # => events=['user.down']


if __name__ == "__main__":
    main()

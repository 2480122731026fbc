"""Quickstart: autowiring by parameter name.

Bind services under plain string names, resolve only the top-level one, and
see how appwire matches each constructor parameter to a binding of the same
name.
"""

from __future__ import annotations

from appwire import App


class Database:
    def __init__(self, dsn: str) -> None:
        self.dsn = dsn


class UserRepository:
    def __init__(self, database: Database) -> None:
        self.database = database


class UserService:
    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository


def main() -> None:
    app = App()
    app.bind("database", "__main__:Database")
    app.bind("repository", "__main__:UserRepository")
    app.bind("users", "__main__:UserService")
    app.associate("database", {"dsn": "sqlite://"})

    service = app.make("users")
    print(f"dsn={service.repository.database.dsn}")  # => dsn=sqlite://

    chain = (
        f"{type(service).__name__}"
        f">{type(service.repository).__name__}"
        f">{type(service.repository.database).__name__}"
    )
    print(f"chain={chain}")  # => chain=UserService>UserRepository>Database

    override = app("database", {"dsn": "postgres://"})
    print(f"override={override.dsn}")  # => override=postgres://


if __name__ == "__main__":
    main()

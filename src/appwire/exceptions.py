from __future__ import annotations


class AppwireError(Exception):
    """Represent a base class for all appwire-specific failures.

    Catch this type when you want to handle any appwire error path without
    matching each concrete exception class individually.
    """


class AppwireInvalidBindingError(AppwireError):
    """Signal a binding whose factory is neither an import path nor a callable.

    Raised immediately by ``App.bind``, ``App.bind_if``, ``App.singleton`` and
    ``App.singleton_if``.

    Typical fix is passing a ``"package.module:Attribute"`` string or a
    callable accepting the argument bag.
    """


class AppwireInvalidOptionsError(AppwireError):
    """Signal application options that fail validation.

    Raised by ``App(...)`` when the merged defaults, environment settings and
    explicit options do not describe a valid ``AppOptions`` payload.
    """


class AppwireAbstractNotFoundError(AppwireError, KeyError):
    """Signal a container lookup for an abstract that has no binding.

    Raised by ``Container.get`` and ``Container.get_binding``. ``App.make``
    never raises it because it checks ``has`` first.
    """

    def __init__(self, abstract: str) -> None:
        self.abstract = abstract
        super().__init__(abstract)

    def __str__(self) -> str:
        return f"No binding registered for '{self.abstract}'."


class AppwireModuleNotFoundError(AppwireError):
    """Signal that an import path cannot be loaded.

    Raised by ``App.make`` when an unbound abstract is not importable, and by
    autowiring factories when their target import path fails to load.

    Typical fixes include binding the abstract explicitly or correcting the
    ``package.module:Attribute`` path.
    """

    def __init__(self, import_path: str) -> None:
        self.import_path = import_path
        super().__init__(f"Could not load module '{import_path}'.")


class AppwireDependencyNotFoundError(AppwireError):
    """Signal an autowired constructor parameter with no value source.

    The parameter was neither passed explicitly, associated with the
    requesting abstract, bound in the container, nor given a default.

    Typical fixes include binding an abstract named after the parameter or
    calling ``App.associate`` for the requesting abstract.
    """

    def __init__(self, dependency: str, abstract: str) -> None:
        self.dependency = dependency
        self.abstract = abstract
        super().__init__(f"Could not find '{dependency}' for '{abstract}'.")


class AppwireCircularDependencyError(AppwireError):
    """Signal an abstract that depends on itself through the resolution chain."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        super().__init__(f"Circular dependency detected: {' -> '.join(chain)}")


class AppwireStartupError(AppwireError):
    """Signal missing required modules detected by ``App.start``.

    The message joins one line per missing module. No provider has been
    registered or booted when this is raised.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__("\n".join(missing))


class AppwireLifecycleError(AppwireError):
    """Signal a lifecycle transition attempted from the wrong state.

    An ``App`` moves forward only: unbooted, booted, down.
    """

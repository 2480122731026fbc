from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from appwire._internal.signatures import accepts_arguments
from appwire.container import Container, Factory
from appwire.defaults import OPTIONS_ABSTRACT
from appwire.exceptions import (
    AppwireCircularDependencyError,
    AppwireInvalidBindingError,
    AppwireLifecycleError,
    AppwireStartupError,
)
from appwire.lifecycle import AppState
from appwire.options import AppOptions, AppSettings, Options, build_options
from appwire.providers import ProviderPhase, get_phase_method, load_provider
from appwire.resolver import ModuleFactoryBuilder, is_importable, load_target

logger = logging.getLogger(__name__)


class App:
    """Bind services, resolve them by name and drive service providers.

    Abstracts are plain strings. A binding's factory is either a callable
    receiving the argument bag of a resolution, or an import path that is
    autowired: the target's parameter names are looked up as abstracts in the
    same application. Resolving an abstract that was never bound imports it
    as an import path and binds it permanently.

    Providers listed in the options go through ``register`` (built-in, then
    user) and ``boot`` (built-in, then user) when the application boots, and
    through ``down`` when it shuts down.
    """

    def __init__(
        self,
        options: AppOptions | Mapping[str, Any] | None = None,
        *,
        settings: AppSettings | None = None,
    ) -> None:
        """Create an application with a fresh container.

        Args:
            options: Explicit options, merged over environment settings and
                defaults. An ``AppOptions`` instance is used as given.
            settings: Environment settings. Read from ``APPWIRE_*`` variables
                when omitted.

        Raises:
            AppwireInvalidOptionsError: If the merged options are invalid.

        """
        self.container = Container()
        self.associations: dict[str, dict[str, Any]] = {}
        self.state = AppState.UNBOOTED

        self._factory_builder = ModuleFactoryBuilder()
        self._resolution_stack: list[str] = []
        self._providers: list[Any] = []
        self._user_providers: list[Any] = []

        resolved_options = build_options(options, settings)
        self._detect_cycles = resolved_options.detect_cycles
        self.instance(OPTIONS_ABSTRACT, Options(resolved_options))

    # Binding

    def bind(
        self,
        abstract: str,
        factory: str | Callable[..., Any],
        *,
        tags: Iterable[str] | None = None,
    ) -> App:
        """Register a transient binding, replacing any existing one.

        Args:
            abstract: Name the binding is resolved by.
            factory: Callable taking the argument bag (or nothing), or an
                import path to autowire.
            tags: Lookup groups for ``make_by_tag``.

        Raises:
            AppwireInvalidBindingError: If ``factory`` is neither a string nor
                a callable.

        """
        self.container.set(abstract, self._create_factory(abstract, factory), tags=tags)
        logger.debug("Bound '%s'", abstract)
        return self

    def bind_if(
        self,
        abstract: str,
        factory: str | Callable[..., Any],
        *,
        tags: Iterable[str] | None = None,
    ) -> App:
        """Register a transient binding unless ``abstract`` is already bound."""
        if not self.container.has(abstract):
            self.bind(abstract, factory, tags=tags)
        return self

    def instance(self, abstract: str, value: Any, *, tags: Iterable[str] | None = None) -> App:
        """Register a pre-built value returned by every resolution."""
        self.container.set(abstract, lambda _arguments: value, tags=tags)
        logger.debug("Bound instance '%s'", abstract)
        return self

    def singleton(
        self,
        abstract: str,
        factory: str | Callable[..., Any],
        *,
        tags: Iterable[str] | None = None,
    ) -> App:
        """Register a binding built once, on its first resolution.

        The first resolution replaces the binding with one returning the built
        instance, so later resolutions ignore their arguments.
        """
        build = self._create_factory(abstract, factory)
        tags = tuple(tags) if tags is not None else None

        def resolve_once(arguments: dict[str, Any]) -> Any:
            instance = build(arguments)
            self.container.set(abstract, lambda _arguments: instance, tags=tags)
            logger.debug("Cached singleton '%s'", abstract)
            return instance

        self.container.set(abstract, resolve_once, tags=tags)
        logger.debug("Bound singleton '%s'", abstract)
        return self

    def singleton_if(
        self,
        abstract: str,
        factory: str | Callable[..., Any],
        *,
        tags: Iterable[str] | None = None,
    ) -> App:
        """Register a singleton unless ``abstract`` is already bound."""
        if not self.container.has(abstract):
            self.singleton(abstract, factory, tags=tags)
        return self

    def associate(self, abstract: str, associations: Mapping[str, Any]) -> App:
        """Set default constructor arguments used when autowiring ``abstract``.

        Later calls merge over earlier ones key by key. Explicit arguments
        passed to ``make`` still take precedence.
        """
        self.associations[abstract] = {**self.associations.get(abstract, {}), **associations}
        return self

    # Resolution

    def has(self, abstract: str) -> bool:
        return self.container.has(abstract)

    def make(self, abstract: str, arguments: Mapping[str, Any] | None = None) -> Any:
        """Resolve ``abstract``.

        Unbound abstracts are treated as import paths: if the import succeeds
        the abstract is bound to it for good, otherwise nothing is registered.

        Args:
            abstract: Name to resolve.
            arguments: Explicit constructor arguments by parameter name.

        Raises:
            AppwireModuleNotFoundError: If ``abstract`` is unbound and not
                importable, or its autowired target fails to load.
            AppwireDependencyNotFoundError: If an autowired parameter has no
                value source.
            AppwireCircularDependencyError: If ``abstract`` is already being
                resolved and cycle detection is enabled.

        """
        if not self.container.has(abstract):
            load_target(abstract)
            logger.debug("Implicitly binding '%s' to its import path", abstract)
            self.bind(abstract, abstract)

        factory = self.container.get(abstract)
        with self._track_resolution(abstract):
            return factory(dict(arguments or {}))

    def make_by_tag(self, tag: str) -> list[Any]:
        """Resolve every abstract tagged with ``tag``, in registration order."""
        return [self.make(abstract) for abstract in self.container.by_tag(tag)]

    def __call__(self, abstract: str, arguments: Mapping[str, Any] | None = None) -> Any:
        return self.make(abstract, arguments)

    def __contains__(self, abstract: object) -> bool:
        return abstract in self.container

    # Lifecycle

    def start(self) -> App:
        """Validate required modules, then boot."""
        self._require_state(AppState.UNBOOTED, "start")
        self.validate_installation()
        return self.boot()

    def validate_installation(self) -> None:
        """Check that every module in ``required_modules`` is importable.

        A module counts as missing when importing it raises anything, including
        errors raised by the module body itself.

        Raises:
            AppwireStartupError: With one message line per missing module.

        """
        options = self.make(OPTIONS_ABSTRACT).get()
        missing = [
            message
            for module, message in options.required_modules.items()
            if not is_importable(module)
        ]
        if missing:
            raise AppwireStartupError(missing)

    def boot(self) -> App:
        """Register every provider, then boot every provider.

        Built-in providers precede user providers in both phases, and the
        register phase completes across both lists before any ``boot`` runs.
        """
        self._require_state(AppState.UNBOOTED, "boot")
        options = self.make(OPTIONS_ABSTRACT).get()
        self._providers = [load_provider(entry) for entry in options.providers]
        self._user_providers = [load_provider(entry) for entry in options.user_providers]
        logger.info(
            "Booting application: providers=%d user_providers=%d",
            len(self._providers),
            len(self._user_providers),
        )

        self._run_phase(ProviderPhase.REGISTER)
        self._run_phase(ProviderPhase.BOOT)

        self.state = AppState.BOOTED
        return self

    def down(self) -> App:
        """Tear down every provider the application booted.

        Bindings are left in place.
        """
        self._require_state(AppState.BOOTED, "shut down")
        self._run_phase(ProviderPhase.DOWN)
        self.state = AppState.DOWN
        return self

    # Internals

    def _create_factory(self, abstract: str, factory: str | Callable[..., Any]) -> Factory:
        if isinstance(factory, str):
            return self._factory_builder.build(self, abstract, factory)
        if not callable(factory):
            msg = (
                f"Factory for '{abstract}' should be an import path or a callable, "
                f"got {factory!r}."
            )
            raise AppwireInvalidBindingError(msg)
        if accepts_arguments(factory):
            return factory
        return lambda _arguments: factory()

    def _run_phase(self, phase: ProviderPhase) -> None:
        logger.info("Running provider phase '%s'", phase.value)
        for provider in (*self._providers, *self._user_providers):
            method = get_phase_method(provider, phase)
            if method is not None:
                method(self)

    def _require_state(self, expected: AppState, action: str) -> None:
        if self.state is not expected:
            msg = f"Cannot {action} an application in state '{self.state.value}'."
            raise AppwireLifecycleError(msg)

    @contextmanager
    def _track_resolution(self, abstract: str) -> Iterator[None]:
        if not self._detect_cycles:
            yield
            return

        if abstract in self._resolution_stack:
            raise AppwireCircularDependencyError([*self._resolution_stack, abstract])

        self._resolution_stack.append(abstract)
        try:
            yield
        finally:
            self._resolution_stack.pop()

    def __repr__(self) -> str:
        return f"App(state={self.state.value}, bindings={len(self.container)})"

"""Import-path loading and name-based autowiring.

A string factory such as ``"myapp.services.mailer:Mailer"`` is turned into a
closure that imports its target on every invocation and builds it by matching
the target's parameter names against, in order of precedence:

1. explicit arguments passed to ``App.make``,
2. defaults registered with ``App.associate`` for the requesting abstract,
3. container bindings named exactly like the parameter,
4. the parameter's own default value.

Autowiring therefore relies on constructor parameter names and container
abstracts using the same vocabulary: a ``mailer`` parameter is satisfied by
whatever is bound as ``"mailer"``.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping
from types import ModuleType
from typing import TYPE_CHECKING, Any

from appwire._internal.signatures import ConstructorInspector, ConstructorParameter
from appwire.container import Factory
from appwire.exceptions import AppwireDependencyNotFoundError, AppwireModuleNotFoundError

if TYPE_CHECKING:
    from appwire.app import App

logger = logging.getLogger(__name__)


def load_target(import_path: str) -> Any:
    """Import and return the object named by ``import_path``.

    Accepted forms are ``package.module``, ``package.module:Attribute.path``
    and the dotted ``package.module.Attribute``.

    Raises:
        AppwireModuleNotFoundError: If the module or attribute cannot be loaded.

    """
    module_path, _, attribute_path = import_path.partition(":")
    if module_path.startswith("."):
        # Relative imports have no anchor package to resolve against.
        raise AppwireModuleNotFoundError(import_path)

    try:
        if attribute_path:
            target: Any = importlib.import_module(module_path)
            for attribute in attribute_path.split("."):
                target = getattr(target, attribute)
            return target
        return _import_dotted(module_path)
    except (ImportError, AttributeError, ValueError) as e:
        raise AppwireModuleNotFoundError(import_path) from e


def _import_dotted(path: str) -> Any:
    try:
        return importlib.import_module(path)
    except ModuleNotFoundError as e:
        parent, _, name = path.rpartition(".")
        if not parent or e.name != path:
            raise
        return getattr(importlib.import_module(parent), name)


def is_importable(import_path: str) -> bool:
    """Return true when ``import_path`` loads without error.

    A module that fails while executing its own import counts as not
    importable, whatever it raises.
    """
    try:
        load_target(import_path)
    except AppwireModuleNotFoundError:
        return False
    except Exception:
        logger.warning("Import of '%s' failed", import_path, exc_info=True)
        return False
    return True


class ModuleFactoryBuilder:
    """Build autowiring factories for import-path bindings."""

    def __init__(self) -> None:
        self._inspector = ConstructorInspector()

    def build(self, app: App, abstract: str, import_path: str) -> Factory:
        """Return a factory constructing ``import_path`` on behalf of ``abstract``.

        The import happens when the factory runs, not when it is built, so
        bindings can reference modules that are not importable yet.

        Args:
            app: Application used for associations and recursive resolution.
            abstract: Abstract the factory is bound to. Selects associations
                and names the requester in error messages.
            import_path: Target to import and construct.

        """

        def factory(arguments: dict[str, Any]) -> Any:
            target = load_target(import_path)
            if isinstance(target, ModuleType) or not callable(target):
                return target

            parameters = self._inspector.get_parameters(target)
            if not parameters:
                return target()

            params = {**app.associations.get(abstract, {}), **arguments}
            args: list[Any] = []
            kwargs: dict[str, Any] = {}
            for parameter in parameters:
                value = self._resolve_parameter(app, abstract, parameter, params)
                if parameter.keyword_only:
                    kwargs[parameter.name] = value
                else:
                    args.append(value)

            logger.debug(
                "Autowiring '%s' from '%s' with parameters %s",
                abstract,
                import_path,
                [parameter.name for parameter in parameters],
            )
            return target(*args, **kwargs)

        return factory

    def _resolve_parameter(
        self,
        app: App,
        abstract: str,
        parameter: ConstructorParameter,
        params: Mapping[str, Any],
    ) -> Any:
        if parameter.name in params:
            return params[parameter.name]
        if app.has(parameter.name):
            return app.make(parameter.name)
        if parameter.has_default:
            return parameter.default
        raise AppwireDependencyNotFoundError(parameter.name, abstract)


__all__ = ["ModuleFactoryBuilder", "is_importable", "load_target"]

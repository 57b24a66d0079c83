"""A single named, lazily evaluated and memoised unit of behaviour."""

import logging
from typing import TYPE_CHECKING, Any, Callable, Optional

from pillar.domain import ModuleName, ModuleOptions
from pillar.introspection import get_dependencies

if TYPE_CHECKING:
    from pillar.package import Package

__all__ = ["Module"]

log = logging.getLogger(__name__)


class Module:
    """A module registered with a :class:`~pillar.package.Package`.

    The definition is called the first time the module is loaded, with the
    values of its dependencies passed positionally in declaration order. Its
    return value is cached and handed out on every later load without calling
    the definition or resolving its dependencies again.

    If the definition raises, nothing is cached and the next load starts
    over.

    Modules are created by :meth:`Package.define`; they are not meant to be
    constructed directly.
    """

    def __init__(
        self,
        package: "Package",
        name: ModuleName,
        definition: Callable,
        options: ModuleOptions,
        dependencies: Optional[list[ModuleName]] = None,
    ):
        self.package = package
        self._name = name
        self._definition = definition
        self._options = options
        self._dependencies = dependencies
        self._cache: Any = None
        self._is_cached = False

    @property
    def name(self) -> ModuleName:
        return self._name

    @property
    def definition(self) -> Callable:
        return self._definition

    @property
    def options(self) -> ModuleOptions:
        return self._options

    @property
    def dependencies(self) -> list[ModuleName]:
        """Names of the modules this one needs, in the order they are passed.

        Read from the definition's signature the first time it is asked for,
        unless they were listed explicitly when the module was defined.
        """
        if self._dependencies is None:
            self._dependencies = [
                dependency.module_name
                for dependency in get_dependencies(self._definition)
            ]
        return list(self._dependencies)

    @property
    def is_cached(self) -> bool:
        return self._is_cached

    @property
    def cached_value(self) -> Any:
        return self._cache

    def cache(self, value: Any) -> Any:
        self._cache = value
        self._is_cached = True
        return value

    def load(self) -> Any:
        """Return the module's value, calling its definition the first time."""
        if self._is_cached:
            return self._cache

        if self._options.log_on_load:
            log.info("Loading [%s].", self._name)

        arguments = self.package.resolve(self.dependencies)
        self.cache(self._definition(*arguments))

        if self._options.log_after_load:
            log.info("Finished loading [%s].", self._name)

        return self._cache

    def needs(self, *module_names: Any) -> Any:
        return self.package.needs(*module_names)

    def run(self, *module_names: Any) -> None:
        return self.package.run(*module_names)

    def __repr__(self) -> str:
        state = "cached" if self._is_cached else "defined"
        return f"<Module [{self._name}] {state}>"

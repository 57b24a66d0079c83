"""Registration and resolution of modules.

A :class:`Package` owns a namespace of modules. Modules are defined once
under a unique name and resolved on demand: resolving a module resolves its
dependencies first, depth-first, then calls its definition and caches the
result. Defining a module called ``main`` resolves it straight away, which
is how an application is kicked off.

Example:
    >>> package = Package()
    >>> package.define("greeting", lambda: "Hello")
    >>> package.define("greeter", lambda greeting: lambda name: f"{greeting} {name}")
    >>> package.needs("greeter")("Arthur")
    'Hello Arthur'
"""

import logging
import threading
from collections.abc import MutableMapping
from dataclasses import replace
from typing import Any, Callable, Iterable, Optional

from pillar.domain import ModuleName, ModuleOptions, NeedsSpec
from pillar.errors import (
    DuplicateError,
    InvalidDefinitionError,
    InvalidNameError,
    InvalidOptionError,
    NotFoundError,
)
from pillar.introspection import inferred_name
from pillar.loading import LoadingStack
from pillar.module import Module
from pillar.names import is_single_name, parse_needs

__all__ = ["MAIN", "Package"]

MAIN = "main"
"""Name of the entry-point module, which is resolved as soon as it is defined."""

log = logging.getLogger(__name__)


def _noop():
    return None


class Package:
    """Owner of a set of modules and the machinery to resolve them.

    All access is serialised by a single reentrant lock: resolution recurses
    through :meth:`needs` on the same thread, and the loading stack used for
    cycle detection is shared by the whole package.

    Args:
        **defaults: Initial default :class:`~pillar.domain.ModuleOptions`
            applied to every module defined in this package.
    """

    def __init__(self, **defaults: bool):
        self._modules: dict[ModuleName, Module] = {}
        self._default_options = ModuleOptions()
        self._loading = LoadingStack()
        self._load_count = 0
        self._lock = threading.RLock()
        self.config(**defaults)

    @property
    def default_options(self) -> ModuleOptions:
        return self._default_options

    @property
    def load_count(self) -> int:
        """Number of top-level resolutions performed so far."""
        return self._load_count

    @property
    def loading(self) -> list[ModuleName]:
        """Names currently being resolved, outermost first."""
        return self._loading.names

    @property
    def current(self) -> Optional[Module]:
        """The module whose resolution is in progress, if any.

        Lets a running definition reach its own module, for example to
        request further dependencies with ``package.current.needs(...)``.
        Another thread asking waits until the resolution in progress ends.
        """
        with self._lock:
            name = self._loading.top
            return self._modules[name] if name is not None else None

    def config(self, **options: bool):
        """Update the default options for modules defined from now on.

        Modules that are already defined keep the options they were given.

        Raises:
            InvalidOptionError: If an option name is not recognised.
        """
        with self._lock:
            self._default_options = self._merge_options(options)

    def exists(self, name: ModuleName) -> bool:
        return name in self._modules

    def names(self) -> list[ModuleName]:
        return list(self._modules)

    def get_module(self, name: ModuleName) -> Module:
        """Look up a defined module.

        Raises:
            NotFoundError: If no module is defined under ``name``. When exactly
                one defined name differs from it only in letter case, the
                message suggests that name.
        """
        try:
            return self._modules[name]
        except KeyError:
            pass

        message = f"Module [{name}] not found."
        lower = name.lower() if isinstance(name, str) else None
        candidates = [key for key in self._modules if key.lower() == lower]
        if len(candidates) == 1:
            message += f" Did you mean [{candidates[0]}]?"
        raise NotFoundError(message)

    def define(
        self,
        name: ModuleName,
        definition: Optional[Callable] = None,
        needs: Optional[NeedsSpec] = None,
        **options: bool,
    ) -> Module:
        """Define a module.

        Names are case-sensitive and can only be defined once. Nothing is
        stored unless every check passes.

        Args:
            name: Unique name of the module.
            definition: Callable producing the module's value. Defaults to a
                no-op returning None.
            needs: Explicit list of dependencies, in any form accepted by
                :func:`~pillar.names.parse_needs`. If omitted, dependencies
                are read from the definition's positional parameters.
            **options: Overrides of the package's default options for this
                module: ``load_now``, ``log_on_load`` and ``log_after_load``.

        Returns:
            The new module.

        Raises:
            InvalidNameError: If ``name`` is not a non-empty string.
            DuplicateError: If a module called ``name`` already exists.
            InvalidDefinitionError: If ``definition`` is not callable.
            InvalidOptionError: If an option name is not recognised.

        Example:
            >>> package.define("db", make_db)
            >>> package.define("service", lambda db: Service(db))
            >>> package.define("view", render, needs="editor: model controller")
        """
        if not isinstance(name, str):
            raise InvalidNameError(
                "First parameter must be a unique string to identify the module."
            )
        if len(name) == 0:
            raise InvalidNameError("Module name cannot be an empty string.")

        with self._lock:
            if self.exists(name):
                raise DuplicateError(f"Module [{name}] already exists.")
            if definition is None:
                definition = _noop
            if not callable(definition):
                raise InvalidDefinitionError(
                    f"Definition of module [{name}] must be callable, "
                    f"got {type(definition).__name__}."
                )

            module = Module(
                self,
                name,
                definition,
                self._merge_options(options),
                self._parse_names(needs) if needs is not None else None,
            )
            self._modules[name] = module
            log.debug("Defined module [%s]", name)

            if name == MAIN or module.options.load_now:
                self.needs(name)

            return module

    def provides(
        self,
        name: Optional[ModuleName] = None,
        needs: Optional[NeedsSpec] = None,
        **options: bool,
    ) -> Callable:
        """Decorator to define a function as a module.

        Args:
            name: Optional module name; defaults to the function name with any
                ``make_`` prefix removed.
            needs: Optional explicit dependency list, as for :meth:`define`.
            **options: Module options, as for :meth:`define`.

        Returns:
            A decorator that defines the module and returns the function
            unchanged.

        Example:
            @package.provides()
            def make_db(config):
                return Database(config)
        """

        def decorator(func: Callable) -> Callable:
            self.define(name or inferred_name(func), func, needs, **options)
            return func

        return decorator

    def needs(self, *module_names: Any) -> Any:
        """Resolve modules and return their values.

        Arguments are flexible. These all resolve the same three modules:

            needs("foo bar qux")
            needs("foo", "bar", "qux")
            needs(["foo", "bar", "qux"])
            needs(["foo", "bar"], "qux")

        and ``needs("editor: model view")`` resolves ``editor/model`` and
        ``editor/view``.

        Returns:
            The module's value when given a single bare name, otherwise a dict
            of module name to value in the order they were resolved.

        Raises:
            InvalidNameError: If any requested name is not a non-empty string.
            NotFoundError: If any requested module is not defined.
            CircularDependencyError: If resolution loops back on itself.
        """
        names = self._parse_names(module_names)

        with self._lock:
            if names and not self._loading:
                self._load_count += 1
                log.debug("Resolution #%d of %s", self._load_count, names)

            results = {}
            for name in names:
                results[name] = self.load(name)

        if is_single_name(*module_names):
            return results[names[0]]
        return results

    def run(self, *module_names: Any) -> None:
        """Resolve modules for their side effects, discarding their values."""
        self.needs(*module_names)
        return None

    def resolve(self, names: Iterable[ModuleName]) -> list[Any]:
        """Resolve each name in turn and return the values in the same order.

        Unlike :meth:`needs`, repeated names give repeated entries.
        """
        with self._lock:
            return [self.load(name) for name in names]

    def load(self, name: ModuleName) -> Any:
        """Resolve a single module, tracking it on the loading stack.

        The module is pushed on the loading stack while it and its
        dependencies resolve, and popped again however resolution ends.

        Raises:
            NotFoundError: If the module is not defined.
            CircularDependencyError: If the module is already being resolved
                further up the chain.
        """
        with self._lock:
            module = self.get_module(name)
            try:
                self._loading.push(name)
                log.debug("Loading [%s], stack %s", name, self._loading.names)
                return module.load()
            finally:
                self._loading.pop(name)

    def install(self, namespace: Any):
        """Expose this package's :meth:`define` as ``define`` on a namespace.

        Args:
            namespace: A mapping, such as a module's ``globals()``, or any
                object accepting attribute assignment.
        """
        if isinstance(namespace, MutableMapping):
            namespace["define"] = self.define
        else:
            setattr(namespace, "define", self.define)

    def _merge_options(self, options: dict[str, bool]) -> ModuleOptions:
        unknown = options.keys() - ModuleOptions.option_names()
        if unknown:
            raise InvalidOptionError(
                f"Unknown module options {sorted(unknown)}; "
                f"expected some of {sorted(ModuleOptions.option_names())}."
            )
        return replace(self._default_options, **options)

    def _parse_names(self, module_names: Any) -> list[ModuleName]:
        names = parse_needs(module_names)
        invalid = [name for name in names if not isinstance(name, str) or not name]
        if invalid:
            raise InvalidNameError(
                f"Module names must be non-empty strings, got {invalid!r}."
            )
        return names

    def __contains__(self, name: ModuleName) -> bool:
        return self.exists(name)

    def __len__(self) -> int:
        return len(self._modules)

    def __repr__(self) -> str:
        return f"<Package of {len(self._modules)} modules>"

"""Pillar synchronous dependency resolver.

Pillar structures an application as a set of named modules. Each module is a
function whose parameters name the modules it depends on. Modules are
resolved on demand, depth-first and synchronously, and each definition runs
exactly once: its result is cached for everyone who needs it afterwards.
Defining a module called ``main`` kicks everything off.

Key Features:
    - Dependencies declared by parameter name, ``Annotated`` name, or an
      explicit list
    - Flexible lookups: ``needs("a b")``, ``needs(["a", ["b"]])`` and the
      ``"editor: model view"`` namespace shorthand
    - Lazy, memoised evaluation; failed definitions are retried, never cached
    - Circular dependency detection

Basic Usage:
    >>> from pillar import Package
    >>>
    >>> package = Package()
    >>>
    >>> @package.provides()
    >>> def make_db():
    ...     return Database()
    >>>
    >>> @package.provides(name="main")
    >>> def start(db):
    ...     serve(db)

The package consists of:
    - package: the Package registry and resolution entry points
    - module: the memoised Module unit
    - names: parsing of requested module names
    - loading: the loading stack used to detect cycles
    - introspection: dependency names from definition signatures
    - domain: options and other value types
    - errors: exceptions raised by all of the above
"""

from pillar.domain import Dependency, ModuleName, ModuleOptions
from pillar.errors import (
    CircularDependencyError,
    DuplicateError,
    InvalidDefinitionError,
    InvalidNameError,
    InvalidOptionError,
    NotFoundError,
    PillarError,
)
from pillar.module import Module
from pillar.names import parse_needs
from pillar.package import MAIN, Package

__all__ = [
    "MAIN",
    "CircularDependencyError",
    "Dependency",
    "DuplicateError",
    "InvalidDefinitionError",
    "InvalidNameError",
    "InvalidOptionError",
    "Module",
    "ModuleName",
    "ModuleOptions",
    "NotFoundError",
    "Package",
    "PillarError",
    "parse_needs",
]

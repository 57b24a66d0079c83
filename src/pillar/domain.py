"""Value types shared by packages and modules."""

from dataclasses import dataclass, fields
from typing import Any, Iterable, Union

ModuleName = str
"""Name a module is registered under. Case-sensitive; may contain '/'."""

NeedsSpec = Union[str, Iterable[Any]]
"""Anything accepted by :func:`pillar.names.parse_needs`.

Example:
    >>> "db"
    >>> "db cache"
    >>> "editor: controller view"
    >>> ["db", ["editor: controller view"]]
"""


@dataclass(frozen=True)
class ModuleOptions:
    """Options fixed on a module when it is defined.

    Attributes:
        load_now: Resolve the module as soon as it is defined, without waiting
            for another module to need it.
        log_on_load: Log a message before the module is first resolved.
        log_after_load: Log a message once the module has been resolved.
    """

    load_now: bool = False
    log_on_load: bool = False
    log_after_load: bool = False

    @classmethod
    def option_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls))


@dataclass(frozen=True)
class Dependency:
    """A dependency declared by a module definition's signature.

    Attributes:
        parameter_name: The parameter name in the definition's signature.
        module_name: The name of the module that fulfils this dependency.
    """

    parameter_name: str
    module_name: ModuleName

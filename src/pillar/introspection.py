"""Derive module names and dependencies from definition callables."""

import inspect
from typing import Annotated, Any, Callable, get_args, get_origin, get_type_hints

from pillar.domain import Dependency

__all__ = ["inferred_name", "get_dependencies"]

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def inferred_name(target: Any) -> str:
    """Derive a module name from a function or class name.

    A ``make_`` prefix is removed from function names.

    Example:
        >>> inferred_name(make_database)  # Returns "database"
        >>> inferred_name(my_service)     # Returns "my_service"
        >>> inferred_name(Database)       # Returns "Database"
    """
    if inspect.isclass(target):
        return target.__name__

    if target.__name__.startswith("make_"):
        return target.__name__[5:]
    else:
        return target.__name__


def get_dependencies(func: Callable) -> list[Dependency]:
    """Extract the dependencies declared by a definition's positional parameters.

    Each positional parameter names the module it depends on. A parameter
    annotated with ``Annotated[T, "name"]`` depends on ``name`` instead,
    which allows depending on names that are not valid identifiers, such as
    namespaced ones. Keyword-only parameters, ``*args`` and ``**kwargs`` are
    not dependencies.

    Args:
        func: The definition to analyse.

    Returns:
        Dependencies in the order the parameters are declared.

    Example:
        >>> def view(db, model: Annotated[Model, "editor/model"]): ...
        >>> get_dependencies(view)
        >>> # [Dependency("db", "db"), Dependency("model", "editor/model")]
    """
    try:
        sig = inspect.signature(func)
    except ValueError:
        # builtins such as dict or list expose no signature; called with no arguments
        return []
    except NameError:
        # deferred annotations (3.14+) naming types imported only for type checking
        import annotationlib

        sig = inspect.signature(
            func, annotation_format=annotationlib.Format.FORWARDREF
        )

    try:
        hints = get_type_hints(func, include_extras=True)
    except (TypeError, NameError):
        # unresolvable forward references fall back to the raw annotations
        hints = {}
    return [
        _make_dependency(hints.get(name, param.annotation), name)
        for name, param in sig.parameters.items()
        if param.kind in _POSITIONAL
    ]


def _make_dependency(annotation, name) -> Dependency:
    if get_origin(annotation) is Annotated:
        _, *metadata = get_args(annotation)
        module_name = next((m for m in metadata if isinstance(m, str)), name)
        return Dependency(name, module_name)
    return Dependency(name, name)

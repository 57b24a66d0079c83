"""Normalisation of the argument shapes accepted by ``needs`` and ``run``.

Module names may be requested one at a time, several to a string, in
(arbitrarily nested) lists, or with a namespace prefix. All of these are
flattened into a single ordered list of fully-qualified names:

    >>> parse_needs("db")
    ['db']
    >>> parse_needs("db cache", ["queue"])
    ['db', 'cache', 'queue']
    >>> parse_needs("editor: controller view")
    ['editor/controller', 'editor/view']
"""

from collections.abc import Iterable
from typing import Any, Iterator

__all__ = ["NAMESPACE_MARKER", "NAMESPACE_SEPARATOR", "parse_needs", "is_single_name"]

NAMESPACE_MARKER = ":"
NAMESPACE_SEPARATOR = "/"


def parse_needs(*module_names: Any) -> list[str]:
    """Flatten any mix of strings and sequences into a list of module names.

    Order is preserved, as are duplicates. Values that are neither strings
    nor iterables are passed through as they are; rejecting them is left to
    the caller.

    Args:
        *module_names: Strings, or iterables of strings and further iterables.

    Returns:
        The flattened list of module names.

    Example:
        >>> parse_needs("foo: a b", ["bar: a b c", ["qux: a b"]])
        ['foo/a', 'foo/b', 'bar/a', 'bar/b', 'bar/c', 'qux/a', 'qux/b']
    """
    return list(_flatten(module_names))


def is_single_name(*module_names: Any) -> bool:
    """True if the arguments are exactly one bare module name.

    This is what ``needs`` uses to decide whether to unwrap its result.
    """
    if len(module_names) != 1 or not isinstance(module_names[0], str):
        return False
    return len(module_names[0].split()) == 1


def _flatten(value: Any) -> Iterator[Any]:
    if isinstance(value, str):
        yield from _split(value)
    elif isinstance(value, Iterable):
        for item in value:
            yield from _flatten(item)
    else:
        yield value


def _split(value: str) -> list[str]:
    if not any(c.isspace() for c in value):
        return [value]

    tokens = value.split()
    if len(tokens) > 1 and tokens[0].endswith(NAMESPACE_MARKER):
        prefix = tokens[0][: -len(NAMESPACE_MARKER)] + NAMESPACE_SEPARATOR
        return [prefix + name for name in tokens[1:]]

    return tokens

"""Bookkeeping for modules that are mid-resolution.

Resolution is depth-first and synchronous, so at any moment the loading
stack is exactly the chain of modules waiting on the one currently being
resolved. A name appearing twice on that chain means the chain has looped
back on itself. A module that was loaded earlier in a different branch is
not on the stack any more, so diamond-shaped dependencies are not mistaken
for cycles.
"""

from typing import Hashable, Iterable, Optional, TypeVar

from pillar.domain import ModuleName
from pillar.errors import CircularDependencyError

__all__ = ["LoadingStack", "find_duplicates"]

T = TypeVar("T", bound=Hashable)


def find_duplicates(items: Iterable[T]) -> list[T]:
    """Return the items that occur more than once, each listed once.

    Example:
        >>> find_duplicates([1, 2, 3, 1, 1, 2])
        [1, 2]
    """
    seen = set()
    duplicates = []
    for item in items:
        if item in seen and item not in duplicates:
            duplicates.append(item)
        seen.add(item)
    return duplicates


class LoadingStack:
    """Ordered names of the modules currently being resolved."""

    def __init__(self):
        self._names: list[ModuleName] = []

    def push(self, name: ModuleName):
        """Push a name and fail if that closes a cycle.

        Raises:
            CircularDependencyError: If any name is now on the stack twice.
                The name stays pushed; the caller is expected to pop it.
        """
        self._names.append(name)
        self.check()

    def pop(self, name: ModuleName):
        """Remove the most recent occurrence of ``name``."""
        for index in range(len(self._names) - 1, -1, -1):
            if self._names[index] == name:
                del self._names[index]
                return

    def check(self):
        duplicates = find_duplicates(self._names)
        if duplicates:
            raise CircularDependencyError(duplicates, list(self._names))

    @property
    def top(self) -> Optional[ModuleName]:
        return self._names[-1] if self._names else None

    @property
    def names(self) -> list[ModuleName]:
        return list(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __bool__(self) -> bool:
        return bool(self._names)

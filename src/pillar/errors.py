"""Exceptions raised while defining and resolving modules."""

__all__ = [
    "PillarError",
    "InvalidNameError",
    "DuplicateError",
    "InvalidDefinitionError",
    "InvalidOptionError",
    "NotFoundError",
    "CircularDependencyError",
]


class PillarError(Exception):
    """Base class for errors raised by a Package."""

    pass


class InvalidNameError(PillarError):
    """Raised when a module name is not a non-empty string."""

    pass


class DuplicateError(PillarError):
    """Raised when a module is defined under a name that is already taken."""

    pass


class InvalidDefinitionError(PillarError):
    """Raised when a module definition is not callable."""

    pass


class InvalidOptionError(PillarError):
    """Raised when an unknown module option is supplied."""

    pass


class NotFoundError(PillarError, LookupError):
    """Raised when a module is requested that was never defined."""

    pass


class CircularDependencyError(PillarError):
    """Raised when a module reappears on the active resolution chain.

    Attributes:
        modules: The names that appear more than once on the loading stack.
        stack: The loading stack at the moment the cycle was detected.
    """

    def __init__(self, modules: list[str], stack: list[str]):
        self.modules = modules
        self.stack = stack
        super().__init__(
            f"Circular dependency detected on modules [{', '.join(modules)}]."
        )

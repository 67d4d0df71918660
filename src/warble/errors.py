"""Warble exception hierarchy.

Shared across the series, view, decoding, and pagination modules so every
module raises and catches the same types.
"""


class WarbleError(Exception):
    """Base for all warble-specific errors."""


class ConfigurationError(WarbleError):
    """Raised when configuration is invalid or an optional dependency is missing."""


class ImmutableCollectionError(WarbleError, TypeError):
    """Raised when a mutation is attempted through a read-only series view.

    Subclasses ``TypeError`` so it is caught like mutating a ``tuple``.
    Treat it as a programming error: fail fast, don't probe first.
    """

    def __init__(self, operation: str, owner: str = "ImmutableSeriesView") -> None:
        self.operation = operation
        self.owner = owner
        super().__init__(f"{owner} is read-only; {operation}() is not supported")


class FormDecodeError(WarbleError, ValueError):
    """Raised when a form body cannot be decoded into a series."""

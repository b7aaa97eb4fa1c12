"""fluxdeps error hierarchy.

All fluxdeps-specific errors inherit from FluxdepsError for easy catching.
Failures raised by derivation functions are never wrapped.
"""

from __future__ import annotations


class FluxdepsError(Exception):
    """Base error for all fluxdeps operations."""


class DependencyError(FluxdepsError):
    """A dependency declaration is not usable.

    Carries the offending ``field``, the ``expected`` shape and the actual
    ``value`` so setup-time failures point straight at the declaration.
    """

    def __init__(self, message: str, *, field: object = None, expected: str = "", value: object = None) -> None:
        super().__init__(message)
        self.field = field
        self.expected = expected
        self.value = value


class MalformedDeclarationError(DependencyError):
    """Entry is neither a Store nor a well-formed Compound."""


class InvalidStoreReferenceError(DependencyError):
    """An element of a Compound's stores is not a Store."""

    def __init__(self, message: str, *, field: object = None, index: int = -1, value: object = None) -> None:
        super().__init__(message, field=field, expected="Store", value=value)
        self.index = index


class DispatchError(FluxdepsError):
    """Dispatcher misuse: re-entrant dispatch, unknown token, wait_for cycle."""

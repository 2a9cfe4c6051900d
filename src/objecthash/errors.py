"""Exception hierarchy raised by :mod:`objecthash`."""

from __future__ import annotations

__all__ = [
    "DepthExceededError",
    "DuplicateKeyError",
    "HasherFinishedError",
    "InvalidInputError",
    "ObjectHashError",
    "UnsupportedAlgorithmError",
    "UnsupportedTypeError",
]


class ObjectHashError(Exception):
    """Base class for every error raised while computing an objecthash."""


class InvalidInputError(ObjectHashError, ValueError):
    """Raised when a value tree violates the invariants of its kind."""


class DuplicateKeyError(InvalidInputError):
    """Raised when two mapping keys share the same canonical encoding.

    Attributes:
        key: The second key observed with an already-seen encoding.
    """

    def __init__(self, key: object) -> None:
        super().__init__(
            f"Mapping contains keys with identical canonical encodings: {key!r}"
        )
        self.key = key


class DepthExceededError(InvalidInputError):
    """Raised when a value nests deeper than the configured maximum."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Value nesting exceeds the maximum depth of {max_depth}")
        self.max_depth = max_depth


class UnsupportedTypeError(ObjectHashError, TypeError):
    """Raised for values outside the hashable value model."""

    def __init__(self, value: object, reason: str | None = None) -> None:
        self.type_name = type(value).__name__
        message = f"Object of type {self.type_name} cannot be objecthashed"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class UnsupportedAlgorithmError(ObjectHashError, ValueError):
    """Raised when an unknown digest algorithm name is requested."""


class HasherFinishedError(ObjectHashError, RuntimeError):
    """Raised when a hasher is used after :meth:`ObjectHasher.finish`."""

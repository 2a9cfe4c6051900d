"""Incremental hasher used by the canonical encoders."""

from __future__ import annotations

from collections.abc import Callable

from cryptography.exceptions import AlreadyFinalized

from objecthash.errors import HasherFinishedError
from objecthash.primitives import DEFAULT_ALGORITHM, new_state, resolve_algorithm

__all__ = ["ObjectHasher"]


class ObjectHasher:
    """One-shot hash state with support for nested sub-digests.

    Raw bytes are absorbed in call order through :meth:`absorb`. Composite
    values use :meth:`absorb_nested`, which hashes a child in an independent
    hasher and absorbs only the child's fixed-length digest, so no length
    prefix is ever needed to delimit children.

    A hasher is consumed by :meth:`finish`. Any later call raises
    :class:`~objecthash.errors.HasherFinishedError`.

    Args:
        algorithm: Name of the digest algorithm backing the hasher.
    """

    __slots__ = ("_algorithm", "_state")

    def __init__(self, algorithm: str = DEFAULT_ALGORITHM) -> None:
        self._algorithm = resolve_algorithm(algorithm)
        self._state = new_state(self._algorithm)

    def __repr__(self) -> str:
        return f"ObjectHasher(algorithm={self._algorithm!r})"

    @property
    def algorithm(self) -> str:
        """Canonical name of the backing digest algorithm."""
        return self._algorithm

    @property
    def digest_size(self) -> int:
        """Length in bytes of the digest returned by :meth:`finish`."""
        return self._state.algorithm.digest_size

    def spawn(self) -> ObjectHasher:
        """Return a fresh hasher using the same algorithm."""
        return ObjectHasher(self._algorithm)

    def absorb(self, data: bytes) -> None:
        """Append raw bytes to the running digest state."""
        try:
            self._state.update(data)
        except AlreadyFinalized as exc:
            raise HasherFinishedError("Hasher has already been finished") from exc

    def absorb_nested(self, producer: Callable[[ObjectHasher], None]) -> None:
        """Hash a child value independently and absorb its digest.

        Args:
            producer: Callable writing the child's full encoding into the
                fresh hasher it receives.
        """
        child = self.spawn()
        producer(child)
        self.absorb(child.finish())

    def finish(self) -> bytes:
        """Finalize the state and return the digest bytes."""
        try:
            return self._state.finalize()
        except AlreadyFinalized as exc:
            raise HasherFinishedError("Hasher has already been finished") from exc

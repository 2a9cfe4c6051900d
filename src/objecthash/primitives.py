"""Digest primitive adapter backed by :mod:`cryptography` hash objects.

The encoder never depends on a concrete hash function. Everything it needs
is a fresh state, ``update`` and a one-shot ``finalize`` yielding a
fixed-length digest, which :class:`cryptography.hazmat.primitives.hashes.Hash`
provides for every algorithm listed in :data:`ALGORITHMS`.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Final, Literal

from cryptography.hazmat.primitives import hashes

from objecthash.errors import UnsupportedAlgorithmError

__all__ = [
    "ALGORITHMS",
    "DEFAULT_ALGORITHM",
    "DigestAlgorithm",
    "digest_size",
    "new_state",
    "resolve_algorithm",
]

DigestAlgorithm = Literal[
    "sha256",
    "sha384",
    "sha512",
    "sha512_256",
    "sha3_256",
    "sha3_512",
    "blake2b",
    "blake2s",
]

DEFAULT_ALGORITHM: Final[DigestAlgorithm] = "sha256"

# BLAKE2 in cryptography only supports the maximum digest size.
ALGORITHMS: Final[dict[str, Callable[[], hashes.HashAlgorithm]]] = {
    "sha256": hashes.SHA256,
    "sha384": hashes.SHA384,
    "sha512": hashes.SHA512,
    "sha512_256": hashes.SHA512_256,
    "sha3_256": hashes.SHA3_256,
    "sha3_512": hashes.SHA3_512,
    "blake2b": lambda: hashes.BLAKE2b(64),
    "blake2s": lambda: hashes.BLAKE2s(32),
}

_COMPACT_NAMES: Final[dict[str, str]] = {
    name.replace("_", ""): name for name in ALGORITHMS
}


def resolve_algorithm(name: str) -> DigestAlgorithm:
    """Normalise and validate a digest algorithm name.

    Args:
        name: Algorithm identifier, case-insensitive. Separators are
            ignored, so ``SHA3-256`` and ``sha-512`` resolve too.

    Returns:
        The canonical algorithm name.

    Raises:
        UnsupportedAlgorithmError: If the name is not a known algorithm.
    """

    compact = name.strip().lower().replace("-", "").replace("_", "")
    resolved = _COMPACT_NAMES.get(compact)
    if resolved is None:
        supported = ", ".join(sorted(ALGORITHMS))
        raise UnsupportedAlgorithmError(
            f"Unsupported digest algorithm {name!r}; expected one of: {supported}"
        )
    return resolved  # type: ignore[return-value]


def new_state(algorithm: str = DEFAULT_ALGORITHM) -> hashes.Hash:
    """Return a fresh, unfinalized hash state for ``algorithm``."""

    factory = ALGORITHMS[resolve_algorithm(algorithm)]
    return hashes.Hash(factory())


def digest_size(algorithm: str = DEFAULT_ALGORITHM) -> int:
    """Return the digest length in bytes produced by ``algorithm``."""

    return ALGORITHMS[resolve_algorithm(algorithm)]().digest_size

"""Top-level entry points for computing objecthash digests."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache

from objecthash.encoders import encode
from objecthash.encoders import member_digest as _member_digest
from objecthash.hasher import ObjectHasher
from objecthash.primitives import DEFAULT_ALGORITHM, resolve_algorithm
from objecthash.settings import (
    DEFAULT_MAX_DEPTH,
    MAX_DEPTH_LIMIT,
    ObjectHashSettings,
    get_settings,
)
from objecthash.types import HashableValue

__all__ = [
    "EncodingOptions",
    "default_options",
    "digest",
    "hexdigest",
    "member_digest",
    "objecthash",
]

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EncodingOptions:
    """Options controlling how a value tree is encoded.

    Attributes:
        algorithm: Digest algorithm backing every hasher in the tree.
        max_depth: Maximum number of nested composite levels.
        octet_strings: Accept raw byte strings under the non-standard ``o``
            tag.
        reject_duplicate_keys: Fail when two mapping keys share a canonical
            encoding instead of hashing both entries.
    """

    algorithm: str = DEFAULT_ALGORITHM
    max_depth: int = DEFAULT_MAX_DEPTH
    octet_strings: bool = False
    reject_duplicate_keys: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "algorithm", resolve_algorithm(self.algorithm))
        if not 1 <= self.max_depth <= MAX_DEPTH_LIMIT:
            raise ValueError(
                f"max_depth must be between 1 and {MAX_DEPTH_LIMIT}, got {self.max_depth}"
            )

    @classmethod
    def from_settings(
        cls, settings: ObjectHashSettings | None = None
    ) -> EncodingOptions:
        """Build options from environment-backed settings."""

        env_settings = settings or get_settings()
        return cls(
            algorithm=env_settings.algorithm,
            max_depth=env_settings.max_depth,
            octet_strings=env_settings.octet_strings,
        )


@lru_cache(maxsize=1)
def default_options() -> EncodingOptions:
    """Return cached options derived from the environment."""

    return EncodingOptions.from_settings()


def objecthash(
    value: HashableValue,
    hasher: ObjectHasher,
    options: EncodingOptions | None = None,
) -> None:
    """Write the canonical encoding of ``value`` into a caller-owned hasher."""

    encode(value, hasher, options or default_options())


def digest(value: HashableValue, *, options: EncodingOptions | None = None) -> bytes:
    """Return the objecthash digest of ``value``.

    Args:
        value: Integer, text, list/tuple, mapping, dataclass instance,
            :class:`~objecthash.types.ObjectHashable` or (when enabled) bytes.
        options: Encoding options. Defaults to :func:`default_options`.

    Returns:
        Fixed-length digest bytes of the configured algorithm.

    Raises:
        UnsupportedTypeError: If the tree contains an unsupported value.
        InvalidInputError: If the tree is malformed or too deeply nested.
    """

    effective = options or default_options()
    hasher = ObjectHasher(effective.algorithm)
    encode(value, hasher, effective)
    result = hasher.finish()
    LOGGER.debug(
        "Computed objecthash digest",
        extra={
            "algorithm": effective.algorithm,
            "value_type": type(value).__name__,
            "digest_size": len(result),
        },
    )
    return result


def hexdigest(value: HashableValue, *, options: EncodingOptions | None = None) -> str:
    """Return the lowercase hex rendering of :func:`digest`."""

    return digest(value, options=options).hex()


def member_digest(
    key: HashableValue,
    value: HashableValue,
    *,
    options: EncodingOptions | None = None,
) -> bytes:
    """Return the sortable bytes of a single mapping entry ``key => value``.

    This is the key digest followed by the value digest, as absorbed by the
    enclosing mapping after sorting.
    """

    effective = options or default_options()
    return _member_digest(key, value, ObjectHasher(effective.algorithm), effective)

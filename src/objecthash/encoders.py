"""Canonical per-kind encoders and the recursive dispatch between them.

Every encoder writes a one-byte type tag followed by canonical content into
an :class:`~objecthash.hasher.ObjectHasher`. Composite kinds never absorb
their children's bytes directly; each child is hashed in a nested hasher
and only its fixed-length digest reaches the parent.
"""

from __future__ import annotations

import dataclasses
import operator
import unicodedata
from collections.abc import Iterable, Sequence
from functools import partial
from typing import TYPE_CHECKING, cast

from objecthash.errors import (
    DepthExceededError,
    DuplicateKeyError,
    InvalidInputError,
    UnsupportedTypeError,
)
from objecthash.types import (
    DICT_TAG,
    INTEGER_TAG,
    LIST_TAG,
    OCTET_TAG,
    STRING_TAG,
    HashableValue,
    ObjectHashable,
    ValueKind,
    classify,
)

if TYPE_CHECKING:
    from objecthash.api import EncodingOptions
    from objecthash.hasher import ObjectHasher

__all__ = [
    "canonical_integer",
    "canonical_text",
    "encode",
    "encode_integer",
    "encode_mapping",
    "encode_octets",
    "encode_sequence",
    "encode_struct",
    "encode_text",
    "member_digest",
    "nested_digest",
]


def canonical_integer(value: object) -> bytes:
    """Return the minimal decimal ASCII form of an integral value.

    Any :class:`numbers.Integral` is promoted to a Python ``int`` first, so
    fixed-width integers from other libraries canonicalize like their value.

    Raises:
        InvalidInputError: If the integer has more digits than the
            interpreter allows converting to text.
    """

    number = operator.index(cast("int", value))
    try:
        return str(number).encode("ascii")
    except ValueError as exc:
        raise InvalidInputError(f"Integer cannot be canonicalized: {exc}") from exc


def canonical_text(value: str) -> bytes:
    """Return the UTF-8 bytes of the NFC normalization of ``value``.

    Raises:
        InvalidInputError: If the string holds lone surrogates.
    """

    try:
        return unicodedata.normalize("NFC", value).encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidInputError(f"Text is not valid Unicode: {exc.reason}") from exc


def encode_integer(value: object, hasher: ObjectHasher) -> None:
    hasher.absorb(INTEGER_TAG)
    hasher.absorb(canonical_integer(value))


def encode_text(value: str, hasher: ObjectHasher) -> None:
    hasher.absorb(STRING_TAG)
    hasher.absorb(canonical_text(value))


def encode_octets(
    value: bytes | bytearray | memoryview,
    hasher: ObjectHasher,
    options: EncodingOptions,
) -> None:
    """Write a raw byte string without normalization.

    Octet strings are a non-standard extension of the scheme; they are
    refused unless ``options.octet_strings`` is enabled.
    """

    if not options.octet_strings:
        raise UnsupportedTypeError(
            value, "octet strings are a non-standard extension and are disabled"
        )
    hasher.absorb(OCTET_TAG)
    hasher.absorb(bytes(value))


def _check_depth(depth: int, options: EncodingOptions) -> None:
    if depth >= options.max_depth:
        raise DepthExceededError(options.max_depth)


def encode_sequence(
    value: Sequence[HashableValue],
    hasher: ObjectHasher,
    options: EncodingOptions,
    depth: int = 0,
) -> None:
    """Write an ordered sequence, one nested digest per element."""

    _check_depth(depth, options)
    hasher.absorb(LIST_TAG)
    for element in value:
        hasher.absorb_nested(
            partial(encode, element, options=options, depth=depth + 1)
        )


def nested_digest(
    value: HashableValue,
    hasher: ObjectHasher,
    options: EncodingOptions,
    depth: int = 0,
) -> bytes:
    """Return the standalone digest of ``value`` using ``hasher``'s algorithm."""

    child = hasher.spawn()
    encode(value, child, options, depth)
    return child.finish()


def _member(
    key: HashableValue,
    value: HashableValue,
    hasher: ObjectHasher,
    options: EncodingOptions,
    depth: int,
) -> tuple[bytes, bytes]:
    """Return ``(key_digest, entry)`` for one mapping entry."""

    key_digest = nested_digest(key, hasher, options, depth)
    return key_digest, key_digest + nested_digest(value, hasher, options, depth)


def member_digest(
    key: HashableValue,
    value: HashableValue,
    hasher: ObjectHasher,
    options: EncodingOptions,
    depth: int = 0,
) -> bytes:
    """Return the position-independent bytes of a single mapping entry.

    The entry is the key's nested digest followed by the value's nested
    digest, so it is twice the algorithm's digest size. It is not hashed
    again before being sorted and absorbed by :func:`encode_mapping`.
    """

    return _member(key, value, hasher, options, depth)[1]


def encode_mapping(
    items: Iterable[tuple[HashableValue, HashableValue]],
    hasher: ObjectHasher,
    options: EncodingOptions,
    depth: int = 0,
) -> None:
    """Write an unordered mapping.

    Each entry contributes its key digest followed by its value digest.
    Entries are sorted by those raw bytes before being absorbed, which makes
    the result independent of iteration order for any mix of key kinds.

    Raises:
        DuplicateKeyError: If two keys canonicalize identically and
            ``options.reject_duplicate_keys`` is set.
    """

    _check_depth(depth, options)
    seen: set[bytes] = set()
    entries: list[bytes] = []
    for key, value in items:
        key_digest, entry = _member(key, value, hasher, options, depth + 1)
        if options.reject_duplicate_keys:
            if key_digest in seen:
                raise DuplicateKeyError(key)
            seen.add(key_digest)
        entries.append(entry)

    entries.sort()
    hasher.absorb(DICT_TAG)
    for entry in entries:
        hasher.absorb(entry)


def encode_struct(
    fields: Iterable[tuple[str, HashableValue]],
    hasher: ObjectHasher,
    options: EncodingOptions,
    depth: int = 0,
) -> None:
    """Write named fields exactly as a mapping from field name to value."""

    encode_mapping(fields, hasher, options, depth)


def _dataclass_fields(value: object) -> list[tuple[str, HashableValue]]:
    return [
        (field.name, getattr(value, field.name))
        for field in dataclasses.fields(value)  # type: ignore[arg-type]
    ]


def encode(
    value: HashableValue,
    hasher: ObjectHasher,
    options: EncodingOptions,
    depth: int = 0,
) -> None:
    """Write the canonical encoding of any supported value into ``hasher``.

    Args:
        value: Value to encode.
        hasher: Destination hasher.
        options: Encoding options controlling extensions and limits.
        depth: Nesting level of ``value`` below the root value.

    Raises:
        UnsupportedTypeError: If a value outside the model is encountered.
        InvalidInputError: If the tree violates a value invariant.
    """

    kind = classify(value, octet_strings=options.octet_strings)
    match kind:
        case ValueKind.INTEGER:
            encode_integer(value, hasher)
        case ValueKind.TEXT:
            encode_text(cast("str", value), hasher)
        case ValueKind.OCTETS:
            encode_octets(cast("bytes", value), hasher, options)
        case ValueKind.SEQUENCE:
            encode_sequence(cast("Sequence[HashableValue]", value), hasher, options, depth)
        case ValueKind.MAPPING:
            encode_mapping(value.items(), hasher, options, depth)  # type: ignore[union-attr]
        case ValueKind.STRUCT:
            encode_struct(_dataclass_fields(value), hasher, options, depth)
        case ValueKind.CUSTOM:
            cast(ObjectHashable, value).objecthash(hasher, options)

"""Type tags and value classification for objecthash encoding."""

from __future__ import annotations

import dataclasses
import enum
import numbers
from collections.abc import Mapping
from typing import TYPE_CHECKING, Final, Protocol, TypeAlias, runtime_checkable

from objecthash.errors import UnsupportedTypeError

if TYPE_CHECKING:
    from objecthash.api import EncodingOptions
    from objecthash.hasher import ObjectHasher

__all__ = [
    "DICT_TAG",
    "INTEGER_TAG",
    "LIST_TAG",
    "OCTET_TAG",
    "STRING_TAG",
    "HashableValue",
    "ObjectHashable",
    "ValueKind",
    "classify",
]

INTEGER_TAG: Final[bytes] = b"i"
STRING_TAG: Final[bytes] = b"u"
LIST_TAG: Final[bytes] = b"l"
DICT_TAG: Final[bytes] = b"d"
# Not part of the reference scheme; only emitted when octet strings are enabled.
OCTET_TAG: Final[bytes] = b"o"


class ValueKind(enum.Enum):
    """Closed set of value kinds the encoder dispatches on."""

    INTEGER = "integer"
    TEXT = "text"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    STRUCT = "struct"
    OCTETS = "octets"
    CUSTOM = "custom"


@runtime_checkable
class ObjectHashable(Protocol):
    """Protocol for objects that write their own canonical encoding.

    Implementations must write exactly one tagged encoding into ``hasher``,
    typically by delegating to the encoders in :mod:`objecthash.encoders`.
    """

    def objecthash(self, hasher: ObjectHasher, options: EncodingOptions) -> None: ...


HashableValue: TypeAlias = (
    int
    | str
    | list["HashableValue"]
    | tuple["HashableValue", ...]
    | Mapping["HashableValue", "HashableValue"]
    | bytes
    | bytearray
    | memoryview
    | ObjectHashable
)


def classify(value: object, *, octet_strings: bool = False) -> ValueKind:
    """Return the :class:`ValueKind` for ``value``.

    Args:
        value: Candidate value.
        octet_strings: Whether raw byte strings are accepted.

    Raises:
        UnsupportedTypeError: If the value is outside the hashable value model.
    """

    # bool subclasses int but has no canonical integer encoding here.
    if isinstance(value, bool):
        raise UnsupportedTypeError(value, "booleans are not part of the value model")
    # A custom encoding wins over any builtin base class.
    if isinstance(value, ObjectHashable):
        return ValueKind.CUSTOM
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (bytes, bytearray, memoryview)):
        if not octet_strings:
            raise UnsupportedTypeError(
                value, "octet strings are a non-standard extension and are disabled"
            )
        return ValueKind.OCTETS
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return ValueKind.STRUCT
    if isinstance(value, numbers.Integral):
        return ValueKind.INTEGER
    raise UnsupportedTypeError(value)

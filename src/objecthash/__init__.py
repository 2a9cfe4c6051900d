"""objecthash - deterministic commitment digests over nested values."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "EncodingOptions",
    "ObjectHasher",
    "ObjectHashable",
    "ObjectHashError",
    "digest",
    "hexdigest",
    "member_digest",
    "objecthash",
]

if TYPE_CHECKING:
    from .api import EncodingOptions, digest, hexdigest, member_digest, objecthash
    from .errors import ObjectHashError
    from .hasher import ObjectHasher
    from .types import ObjectHashable


def __getattr__(name: str) -> Any:
    """Lazily import submodules so ``cryptography`` loads on first use."""

    module_map = {
        "EncodingOptions": "api",
        "digest": "api",
        "hexdigest": "api",
        "member_digest": "api",
        "objecthash": "api",
        "ObjectHasher": "hasher",
        "ObjectHashable": "types",
        "ObjectHashError": "errors",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)

"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from objecthash.api import EncodingOptions, default_options  # noqa: E402

_ENV_VARS = (
    "OBJECTHASH_ALGORITHM",
    "OBJECTHASH_MAX_DEPTH",
    "OBJECTHASH_OCTET_STRINGS",
    "OBJECTHASH_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep environment settings and cached defaults from leaking between tests."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    default_options.cache_clear()
    yield
    default_options.cache_clear()


@pytest.fixture
def options() -> EncodingOptions:
    """Reference options: SHA-256, standard value model."""

    return EncodingOptions()


@pytest.fixture
def octet_options() -> EncodingOptions:
    """Options with the non-standard octet string extension enabled."""

    return EncodingOptions(octet_strings=True)

"""Tests for environment-backed settings and default options."""

from __future__ import annotations

import logging

import pytest

from objecthash.api import EncodingOptions, default_options, digest
from objecthash.errors import UnsupportedAlgorithmError
from objecthash.settings import DEFAULT_MAX_DEPTH, MAX_DEPTH_LIMIT, get_settings


def test_defaults_without_environment() -> None:
    settings = get_settings()
    assert settings.algorithm == "sha256"
    assert settings.max_depth == DEFAULT_MAX_DEPTH
    assert settings.octet_strings is False
    assert settings.log_level_number == logging.WARNING


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OBJECTHASH_ALGORITHM", "sha3_256")
    monkeypatch.setenv("OBJECTHASH_MAX_DEPTH", " 12 ")
    monkeypatch.setenv("OBJECTHASH_OCTET_STRINGS", "true")
    monkeypatch.setenv("OBJECTHASH_LOG_LEVEL", "debug")

    settings = get_settings()
    assert settings.algorithm == "sha3_256"
    assert settings.max_depth == 12
    assert settings.octet_strings is True
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("invalid", DEFAULT_MAX_DEPTH), ("0", DEFAULT_MAX_DEPTH), ("100000", MAX_DEPTH_LIMIT)],
)
def test_malformed_depth_falls_back(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: int
) -> None:
    monkeypatch.setenv("OBJECTHASH_MAX_DEPTH", raw)
    assert get_settings().max_depth == expected


def test_unknown_log_level_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OBJECTHASH_LOG_LEVEL", "chatty")
    assert get_settings().log_level == "WARNING"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("maybe", False),
        ("", False),
        ("off", False),
        ("0", False),
        (" YES ", True),
        ("1", True),
        ("On", True),
    ],
)
def test_octet_strings_flag_is_tolerant(
    monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool
) -> None:
    monkeypatch.setenv("OBJECTHASH_OCTET_STRINGS", raw)
    assert get_settings().octet_strings is expected


def test_options_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OBJECTHASH_ALGORITHM", "SHA-512")
    monkeypatch.setenv("OBJECTHASH_OCTET_STRINGS", "1")

    options = EncodingOptions.from_settings()
    assert options.algorithm == "sha512"
    assert options.octet_strings is True
    assert options.reject_duplicate_keys is True


def test_default_options_follow_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OBJECTHASH_ALGORITHM", "blake2b")
    assert len(digest([1])) == 64
    assert default_options().algorithm == "blake2b"


def test_unknown_algorithm_in_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OBJECTHASH_ALGORITHM", "md5")
    with pytest.raises(UnsupportedAlgorithmError):
        EncodingOptions.from_settings()

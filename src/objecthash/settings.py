"""Environment-backed settings primitives for :mod:`objecthash`."""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["DEFAULT_MAX_DEPTH", "MAX_DEPTH_LIMIT", "ObjectHashSettings", "get_settings"]

DEFAULT_MAX_DEPTH = 100
# Each nesting level costs several interpreter frames; stay well inside the
# default recursion limit.
MAX_DEPTH_LIMIT = 160


class ObjectHashSettings(BaseSettings):
    """Expose environment-derived configuration knobs for objecthash.

    All environment lookups go through this class. Malformed values fall back
    to the documented defaults rather than failing at import time.

    Attributes:
        algorithm: Digest algorithm used when callers do not pass options.
        max_depth: Maximum number of nested composite levels accepted.
        octet_strings: Enables the non-standard raw byte string extension.
        log_level: Log level applied by the command-line entry point.
    """

    algorithm: str = Field(default="sha256", alias="OBJECTHASH_ALGORITHM")
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, alias="OBJECTHASH_MAX_DEPTH")
    octet_strings: bool = Field(default=False, alias="OBJECTHASH_OCTET_STRINGS")
    log_level: str = Field(default="WARNING", alias="OBJECTHASH_LOG_LEVEL")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("max_depth", mode="before")
    @classmethod
    def _parse_max_depth(cls, value: object) -> int:
        """Parse the depth limit, clamping it to the supported range.

        Args:
            value: Raw environment value.

        Returns:
            Parsed depth, or :data:`DEFAULT_MAX_DEPTH` when unparsable.
        """

        parsed: int | None = None
        if isinstance(value, int) and not isinstance(value, bool):
            parsed = value
        elif isinstance(value, str):
            try:
                parsed = int(value.strip())
            except ValueError:
                parsed = None
        if parsed is None or parsed < 1:
            return DEFAULT_MAX_DEPTH
        return min(parsed, MAX_DEPTH_LIMIT)

    @field_validator("octet_strings", mode="before")
    @classmethod
    def _parse_octet_strings(cls, value: object) -> bool:
        """Parse the extension flag; unrecognised values leave it disabled."""

        if isinstance(value, bool):
            return value
        if isinstance(value, int):
            return value != 0
        if isinstance(value, str):
            return value.strip().lower() in {"1", "true", "yes", "on"}
        return False

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        """Upper-case the log level and reject unknown names."""

        if not isinstance(value, str):
            return "WARNING"
        candidate = value.strip().upper()
        if candidate not in logging.getLevelNamesMapping():
            return "WARNING"
        return candidate

    @property
    def log_level_number(self) -> int:
        """Numeric form of :attr:`log_level`."""

        return logging.getLevelNamesMapping()[self.log_level]


def get_settings() -> ObjectHashSettings:
    """Return a :class:`ObjectHashSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return ObjectHashSettings()

"""Exceptions raised while building collector hits."""

from __future__ import annotations


class GaWireError(Exception):
    """Base exception for gawire."""


class ConfigError(GaWireError):
    """Raised when the collector settings are missing a required value."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class ValidationError(GaWireError):
    """Raised when an event cannot be mapped to a hit."""


class EncodingError(GaWireError):
    """Raised when a payload value has no wire representation."""

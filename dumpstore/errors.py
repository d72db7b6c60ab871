"""
Exception hierarchy for dumpstore.
Everything the store raises on its own behalf derives from StoreError.
Exceptions raised by caller-supplied functions are never wrapped.
"""

from typing import Optional

__all__ = [
    "StoreError",
    "ConfigurationError",
    "InvalidLocationError",
    "NoTypesProvidedError",
    "InvalidPersistenceModeError",
    "StoreIOError",
    "DecodeError",
    "EncodeError",
]


class StoreError(Exception):
    """Root exception for all dumpstore errors."""

    # Set by Store.add when the record was appended but could not be persisted.
    record_id: Optional[int] = None


# ── Construction ──────────────────────────────────────────────────────────────

class ConfigurationError(StoreError):
    """Raised when a Store is constructed with invalid arguments."""


class InvalidLocationError(ConfigurationError):
    """Raised when the backing location is empty."""


class NoTypesProvidedError(ConfigurationError):
    """Raised when no record types are registered; stored bytes could not be decoded."""


class InvalidPersistenceModeError(ConfigurationError):
    """Raised when the persistence mode (or its interval) is not recognised."""


# ── Persistence ───────────────────────────────────────────────────────────────

class StoreIOError(StoreError):
    """Raised when the backing file cannot be read or written."""


class DecodeError(StoreError):
    """Raised when a persisted payload is malformed or names an unregistered type."""


class EncodeError(StoreError):
    """Raised when a record fails to encode itself (JSON or binary)."""

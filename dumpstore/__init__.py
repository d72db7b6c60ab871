"""
dumpstore — an in-memory, append-only list of records with flat-file persistence.

Public API
──────────
Store        — the guarded record list (add, view, update, map, save, load, encode_json)
PersistMode  — manual | on_write | interval
Record       — pydantic base class for stored values
RecordType   — (tag, prototype) registration pair
TypeRegistry — tag <-> record class mapping used by save/load
"""

from dumpstore.errors import (
    ConfigurationError,
    DecodeError,
    EncodeError,
    InvalidLocationError,
    InvalidPersistenceModeError,
    NoTypesProvidedError,
    StoreError,
    StoreIOError,
)
from dumpstore.record import Record, RecordType
from dumpstore.registry import TypeRegistry, default_registry
from dumpstore.store import PersistMode, Store

__all__ = [
    "Store",
    "PersistMode",
    "Record",
    "RecordType",
    "TypeRegistry",
    "default_registry",
    "StoreError",
    "ConfigurationError",
    "InvalidLocationError",
    "NoTypesProvidedError",
    "InvalidPersistenceModeError",
    "StoreIOError",
    "DecodeError",
    "EncodeError",
]

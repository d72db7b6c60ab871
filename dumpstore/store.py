"""
dumpstore core
In-memory, append-only list of records guarded by a reader/writer lock,
mirrored to a single flat file.

Persistence modes:
  manual    — nothing is written until save() is called
  on_write  — add(), update() and map() save before releasing the lock
  interval  — a background thread saves every `interval` seconds

Usage::

    store = Store("posts.db", PersistMode.ON_WRITE, RecordType("example.Post", Post))
    post_id = store.add(Post(name="hello", body="world"))
    store.view(lambda posts: posts[post_id].name)
"""

import logging
import os
import threading
from enum import Enum
from typing import Any, Callable, Optional

from dumpstore.codec import decode_records, encode_records
from dumpstore.errors import (
    EncodeError,
    InvalidLocationError,
    InvalidPersistenceModeError,
    NoTypesProvidedError,
    StoreError,
)
from dumpstore.locks import RWLock
from dumpstore.record import RecordType
from dumpstore.registry import TypeRegistry, default_registry
from dumpstore.repositories import FileStore

__all__ = ["PersistMode", "Store", "DEFAULT_INTERVAL"]

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 60.0


class PersistMode(str, Enum):
    MANUAL = "manual"
    ON_WRITE = "on_write"
    INTERVAL = "interval"


class Store:
    """Ordered collection of records; a record's id is its insertion index."""

    def __init__(
        self,
        location,
        persist_mode,
        *types: RecordType,
        registry: Optional[TypeRegistry] = None,
        interval: float = DEFAULT_INTERVAL,
        on_persist_error: Optional[Callable[[Exception], None]] = None,
    ):
        if not location or not os.fspath(location):
            raise InvalidLocationError("invalid location: must be a non-empty path")
        if not types:
            raise NoTypesProvidedError("no types were provided")
        try:
            mode = PersistMode(persist_mode)
        except ValueError:
            raise InvalidPersistenceModeError(f"invalid persist mode: {persist_mode!r}") from None
        if mode is PersistMode.INTERVAL:
            try:
                seconds = float(interval)
            except (TypeError, ValueError):
                raise InvalidPersistenceModeError(f"invalid persist interval: {interval!r}") from None
            if not seconds > 0:
                raise InvalidPersistenceModeError(f"invalid persist interval: {interval!r}")
            interval = seconds

        self._registry = registry if registry is not None else default_registry
        for tag, prototype in types:
            self._registry.register(tag, prototype)

        self._location = os.fspath(location)
        self._file = FileStore(self._location)
        self._persist_mode = mode
        self._records: list = []
        self._lock = RWLock()
        self._interval = interval
        self._on_persist_error = on_persist_error
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

        if mode is PersistMode.INTERVAL:
            self._thread = threading.Thread(
                target=self._persist_interval,
                name=f"dumpstore-persist:{self._location}",
                daemon=True,
            )
            self._thread.start()

    # ── Properties ────────────────────────────────────────────────────────

    @property
    def location(self) -> str:
        return self._location

    @property
    def persist_mode(self) -> PersistMode:
        return self._persist_mode

    @property
    def registry(self) -> TypeRegistry:
        return self._registry

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._records)

    def __repr__(self) -> str:
        return f"Store(location={self._location!r}, persist_mode={self._persist_mode.value!r})"

    # ── Background persistence ────────────────────────────────────────────

    def _persist_interval(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                with self._lock.write_locked():
                    self._save()
            except Exception as e:
                logger.exception(f"Interval save to {self._location} failed: {e}")
                if self._on_persist_error is not None:
                    try:
                        self._on_persist_error(e)
                    except Exception:
                        logger.exception("on_persist_error callback raised")

    def close(self) -> None:
        """Stop the interval thread, if any. Safe to call more than once."""
        self._stop.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ── Public API ────────────────────────────────────────────────────────

    def add(self, record) -> int:
        """
        Append *record* and return its id.

        In on_write mode the store is saved before returning; a failed save is
        raised with `record_id` set, and the record stays in memory.
        """
        with self._lock.write_locked():
            self._records.append(record)
            record_id = len(self._records) - 1
            if self._persist_mode is PersistMode.ON_WRITE:
                try:
                    self._save()
                except StoreError as e:
                    e.record_id = record_id
                    raise
        return record_id

    def view(self, fn: Callable[[list], Any]) -> Any:
        """Call fn(records) under shared access and return its result.

        The list is the live storage; do not mutate it or keep it after fn returns.
        """
        with self._lock.read_locked():
            return fn(self._records)

    def update(self, fn: Callable[[list], Any]) -> Any:
        """
        Call fn(records) under exclusive access and return its result.

        If fn raises, the exception propagates and nothing is saved. In
        on_write mode a successful update is saved before the lock is released.
        """
        with self._lock.write_locked():
            result = fn(self._records)
            if self._persist_mode is PersistMode.ON_WRITE:
                self._save()
        return result

    def map(self, fn: Callable[[Any], Any]) -> None:
        """Call fn(record) for every record in id order; stops at the first exception."""
        with self._lock.write_locked():
            for record in self._records:
                fn(record)
            if self._persist_mode is PersistMode.ON_WRITE:
                self._save()

    def save(self) -> None:
        """Write every record to the backing file, replacing its content."""
        with self._lock.read_locked():
            self._save()

    def _save(self) -> None:
        # Caller holds the lock (shared or exclusive).
        data = encode_records(self._records, self._registry)
        self._file.write(data)
        logger.debug(f"Saved {len(self._records)} records to {self._location}")

    def load(self) -> None:
        """Replace the in-memory records with the content of the backing file."""
        with self._lock.write_locked():
            data = self._file.read()
            records = decode_records(data, self._registry)
            self._records = records
        logger.info(f"Loaded {len(records)} records from {self._location}")

    def encode_json(self) -> bytes:
        """Return the records as a JSON array, each record's own encoding verbatim."""
        with self._lock.read_locked():
            parts = []
            for index, record in enumerate(self._records):
                try:
                    parts.append(bytes(record.encode_json()))
                except Exception as e:
                    raise EncodeError(
                        f"Record {index} ({type(record).__name__}) failed to encode as JSON: {e}"
                    ) from e
        return b"[" + b",".join(parts) + b"]"

"""
Whole-file persistence for a Store's backing location.
Reads return the full content; writes replace it in full.
"""

import logging
import os
import threading
from pathlib import Path

from dumpstore.errors import StoreIOError

logger = logging.getLogger(__name__)

# One write lock per resolved path, shared by every FileStore in the process.
_path_locks: dict[str, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = os.path.realpath(path)
    with _path_locks_guard:
        lock = _path_locks.get(key)
        if lock is None:
            lock = _path_locks[key] = threading.Lock()
        return lock


class FileStore:
    """Single-file backend: read the whole file, replace the whole file."""

    def __init__(self, path):
        self.path = Path(path)

    def read(self) -> bytes:
        try:
            with open(self.path, "rb") as f:
                return f.read()
        except OSError as e:
            raise StoreIOError(f"Cannot read {self.path}: {e}") from e

    def write(self, data: bytes) -> None:
        # Written through the target: a read-only file fails, mode/owner/symlinks are kept.
        with _lock_for(self.path):
            try:
                with open(self.path, "wb") as f:
                    f.write(data)
            except OSError as e:
                raise StoreIOError(f"Cannot write {self.path}: {e}") from e
        logger.debug(f"Wrote {len(data)} bytes to {self.path}")

"""
Type registry: maps the tags written into persisted files to record classes.

The module-level default_registry is shared by every Store that is not given
its own. Registering a tag twice is last-write-wins, process-wide when the
default registry is used.
"""

import logging
import threading
from typing import Any, Optional

from dumpstore.errors import DecodeError, EncodeError

__all__ = ["TypeRegistry", "default_registry"]

logger = logging.getLogger(__name__)


class TypeRegistry:
    """Bidirectional tag <-> record class mapping."""

    def __init__(self) -> None:
        self._by_tag: dict[str, type] = {}
        self._by_type: dict[type, str] = {}
        self._lock = threading.Lock()

    def register(self, tag: str, prototype: Any) -> None:
        """Register *prototype* (a class or an instance of one) under *tag*."""
        cls = prototype if isinstance(prototype, type) else type(prototype)
        with self._lock:
            previous = self._by_tag.get(tag)
            if previous is not None and previous is not cls:
                logger.warning(
                    f"Type tag {tag!r} re-registered: {previous.__name__} -> {cls.__name__}"
                )
                if self._by_type.get(previous) == tag:
                    del self._by_type[previous]
            self._by_tag[tag] = cls
            self._by_type[cls] = tag

    def resolve(self, tag: str) -> type:
        """Return the class registered under *tag* or raise DecodeError."""
        with self._lock:
            cls = self._by_tag.get(tag)
        if cls is None:
            raise DecodeError(f"Unregistered type tag: {tag!r}")
        return cls

    def tag_for(self, record: Any) -> str:
        """Return the tag registered for *record*'s class or raise EncodeError."""
        with self._lock:
            tag = self._by_type.get(type(record))
        if tag is None:
            raise EncodeError(f"Type {type(record).__name__} is not registered")
        return tag

    def get(self, tag: str) -> Optional[type]:
        with self._lock:
            return self._by_tag.get(tag)

    def tags(self) -> list[str]:
        with self._lock:
            return sorted(self._by_tag)

    def __contains__(self, tag: object) -> bool:
        with self._lock:
            return tag in self._by_tag

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_tag)


default_registry = TypeRegistry()

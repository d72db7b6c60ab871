"""Persistence backends for the store."""

from .file_store import FileStore

__all__ = ["FileStore"]

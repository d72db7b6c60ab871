"""Record base model and the (tag, prototype) pair used to register record types."""

from typing import Any, NamedTuple

from pydantic import BaseModel

__all__ = ["Record", "RecordType"]


class Record(BaseModel):
    """
    Base class for values held in a Store.

    The store treats records opaquely. It only needs each record to encode
    itself to JSON and to bytes, and each record class to rebuild an instance
    from those bytes. Both encodings default to the model's JSON form;
    subclasses override them when they need a different wire shape.
    """

    def encode_json(self) -> bytes:
        return self.model_dump_json().encode("utf-8")

    def encode_binary(self) -> bytes:
        return self.model_dump_json().encode("utf-8")

    @classmethod
    def decode_binary(cls, data: bytes) -> "Record":
        return cls.model_validate_json(data)


class RecordType(NamedTuple):
    """
    Registers a record type under a stable tag.

    tag       — usually "module.ClassName", e.g. "example.Post"
    prototype — the record class, or an instance of it
    """
    tag: str
    prototype: Any

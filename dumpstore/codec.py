"""
Binary framing for a sequence of records.

Layout (big-endian):
  uint32 record_count
  per record:
    uint16 tag_length   + tag bytes (UTF-8)
    uint32 payload_length + payload (record.encode_binary())

There is no version field; the tag is the only type information written.
"""

import struct
from typing import Sequence

from dumpstore.errors import DecodeError, EncodeError
from dumpstore.registry import TypeRegistry

__all__ = ["encode_records", "decode_records"]

_COUNT = struct.Struct(">I")
_TAG_LEN = struct.Struct(">H")
_PAYLOAD_LEN = struct.Struct(">I")


def encode_records(records: Sequence, registry: TypeRegistry) -> bytes:
    """Encode *records* in order. Raises EncodeError on the first failing record."""
    parts = [_COUNT.pack(len(records))]
    for index, record in enumerate(records):
        tag = registry.tag_for(record).encode("utf-8")
        try:
            payload = record.encode_binary()
        except Exception as e:
            raise EncodeError(f"Record {index} ({type(record).__name__}) failed to encode: {e}") from e
        if len(tag) > 0xFFFF:
            raise EncodeError(f"Type tag too long ({len(tag)} bytes)")
        parts.append(_TAG_LEN.pack(len(tag)))
        parts.append(tag)
        parts.append(_PAYLOAD_LEN.pack(len(payload)))
        parts.append(bytes(payload))
    return b"".join(parts)


def decode_records(data: bytes, registry: TypeRegistry) -> list:
    """Decode a payload produced by encode_records. Raises DecodeError on any defect."""
    view = memoryview(data)
    offset = 0

    def _take(n: int) -> memoryview:
        nonlocal offset
        if offset + n > len(view):
            raise DecodeError(f"Truncated payload at byte {offset} (wanted {n} more)")
        chunk = view[offset:offset + n]
        offset += n
        return chunk

    (count,) = _COUNT.unpack(_take(_COUNT.size))
    records = []
    for index in range(count):
        (tag_len,) = _TAG_LEN.unpack(_take(_TAG_LEN.size))
        try:
            tag = bytes(_take(tag_len)).decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Record {index}: type tag is not valid UTF-8") from e
        cls = registry.resolve(tag)
        (payload_len,) = _PAYLOAD_LEN.unpack(_take(_PAYLOAD_LEN.size))
        payload = bytes(_take(payload_len))
        try:
            records.append(cls.decode_binary(payload))
        except Exception as e:
            raise DecodeError(f"Record {index} ({tag}) failed to decode: {e}") from e

    if offset != len(view):
        raise DecodeError(f"{len(view) - offset} trailing bytes after {count} records")
    return records

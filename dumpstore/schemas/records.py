"""Record types stored by the example API."""

from dumpstore.record import Record, RecordType


class Post(Record):
    name: str
    body: str = ""


POST_TYPE = RecordType("example.Post", Post)

import pytest

from dumpstore import Record, RecordType, TypeRegistry


class Blob(Record):
    data: str

    def encode_json(self) -> bytes:
        if self.data == "bad":
            raise ValueError("bad test")
        return super().encode_json()


class Pair(Record):
    a: int = 0
    b: int = 0


BLOB_TYPE = RecordType("tests.Blob", Blob)
PAIR_TYPE = RecordType("tests.Pair", Pair)


@pytest.fixture
def registry():
    """A private registry so tests never touch the process-wide default."""
    return TypeRegistry()


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "test.db"

"""
Tests for the example posts service (dumpstore.main)

Covers:
    add → id                        → 200 {"id": n}
    list                            → JSON array of posts
    get by id                       → 200 post / 404 unknown
    restart                         → posts reloaded from disk
    persistence failure on add      → 500
"""

import pytest
from fastapi.testclient import TestClient

from dumpstore import InvalidPersistenceModeError, PersistMode, RecordType, Store, TypeRegistry
from dumpstore.api.deps import require_post
from dumpstore.config import Settings
from dumpstore.main import create_app, open_store
from dumpstore.schemas import Post


@pytest.fixture
def settings(tmp_path, monkeypatch):
    monkeypatch.setenv("DUMPSTORE_PATH", str(tmp_path / "posts.db"))
    monkeypatch.setenv("DUMPSTORE_PERSIST", "on_write")
    return Settings()


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["records"] == 0
    assert body["persist_mode"] == "on_write"


def test_add_list_get(client):
    assert client.get("/api/posts").json() == []

    res = client.post("/api/posts", json={"name": "first", "body": "hello"})
    assert res.status_code == 200
    assert res.json() == {"id": 0}
    assert client.post("/api/posts", json={"name": "second"}).json() == {"id": 1}

    res = client.get("/api/posts")
    assert res.headers["content-type"] == "application/json"
    assert res.json() == [
        {"name": "first", "body": "hello"},
        {"name": "second", "body": ""},
    ]

    assert client.get("/api/posts/1").json() == {"name": "second", "body": ""}


@pytest.mark.parametrize("post_id", [5, -1])
def test_get_unknown(client, post_id):
    assert client.get(f"/api/posts/{post_id}").status_code == 404


def test_posts_survive_restart(settings):
    with TestClient(create_app(settings)) as c:
        c.post("/api/posts", json={"name": "kept", "body": "b"})

    with TestClient(create_app(settings)) as c:
        assert c.get("/api/posts/0").json() == {"name": "kept", "body": "b"}


def test_add_persistence_failure(tmp_path, monkeypatch):
    monkeypatch.setenv("DUMPSTORE_PATH", str(tmp_path / "missing" / "posts.db"))
    monkeypatch.setenv("DUMPSTORE_PERSIST", "on_write")
    with TestClient(create_app(Settings())) as c:
        res = c.post("/api/posts", json={"name": "x"})
        assert res.status_code == 500
        assert "Post 0" in res.json()["detail"]
        # The record is still served from memory.
        assert c.get("/api/posts/0").json() == {"name": "x", "body": ""}


def test_settings_defaults(monkeypatch):
    for name in ("DUMPSTORE_PATH", "DUMPSTORE_PERSIST", "DUMPSTORE_INTERVAL"):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert str(s.DUMPSTORE_PATH) == "posts.db"
    assert s.DUMPSTORE_PERSIST == "on_write"
    assert s.DUMPSTORE_INTERVAL == 60.0


def test_invalid_interval_reaches_store(tmp_path, monkeypatch):
    monkeypatch.setenv("DUMPSTORE_PATH", str(tmp_path / "posts.db"))
    monkeypatch.setenv("DUMPSTORE_PERSIST", "interval")
    monkeypatch.setenv("DUMPSTORE_INTERVAL", "not-a-number")
    s = Settings()
    assert s.DUMPSTORE_INTERVAL == "not-a-number"
    with pytest.raises(InvalidPersistenceModeError):
        open_store(s)


def test_post_is_encoded_under_read_lock(tmp_path):
    seen = []

    class WatchedPost(Post):
        def encode_json(self) -> bytes:
            seen.append(store._lock._readers)
            return super().encode_json()

    store = Store(
        tmp_path / "posts.db",
        PersistMode.MANUAL,
        RecordType("tests.WatchedPost", WatchedPost),
        registry=TypeRegistry(),
    )
    store.add(WatchedPost(name="a"))

    assert require_post(0, store) == b'{"name":"a","body":""}'
    assert seen == [1]

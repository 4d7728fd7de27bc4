"""Tests for the key-value storage backends."""

import pytest

from devinsight.storage import MemoryStore, SQLiteStore


@pytest.fixture(params=["memory", "sqlite"])
def kv(request, tmp_path):
    if request.param == "memory":
        yield MemoryStore()
    else:
        with SQLiteStore(str(tmp_path / "kv.db")) as db:
            yield db


class TestContract:
    def test_missing_key_is_none(self, kv):
        assert kv.get("nope") is None

    def test_put_replaces(self, kv):
        kv.put("a", {"v": 1})
        kv.put("a", {"v": 2})
        assert kv.get("a") == {"v": 2}

    def test_delete(self, kv):
        kv.put("a", [1, 2])
        kv.delete("a")
        kv.delete("a")
        assert kv.get("a") is None

    def test_keys_by_prefix_sorted(self, kv):
        for key in ["insight:b", "insight:a", "feedback:a"]:
            kv.put(key, 1)
        assert kv.keys("insight:") == ["insight:a", "insight:b"]
        assert len(kv.keys()) == 3

    def test_like_wildcards_are_literal(self, kv):
        kv.put("a_b:1", 1)
        kv.put("axb:1", 1)
        assert kv.keys("a_b") == ["a_b:1"]

    def test_returned_values_are_copies(self, kv):
        kv.put("list", [1, 2])
        value = kv.get("list")
        value.append(3)
        assert kv.get("list") == [1, 2]


class TestMemoryStore:
    def test_stored_value_detached_from_caller(self):
        store = MemoryStore()
        original = {"items": [1]}
        store.put("k", original)
        original["items"].append(2)
        assert store.get("k") == {"items": [1]}


class TestSQLiteStore:
    def test_context_manager(self, tmp_path):
        with SQLiteStore(str(tmp_path / "db.sqlite")) as db:
            assert db.conn is not None
        with pytest.raises(RuntimeError):
            db.conn

    def test_values_persist_across_connections(self, tmp_path):
        path = str(tmp_path / "db.sqlite")
        with SQLiteStore(path) as db:
            db.put("evolution:ws", [{"timestamp": 1.0}])
        with SQLiteStore(path) as db:
            assert db.get("evolution:ws") == [{"timestamp": 1.0}]

    def test_migrate_idempotent(self, tmp_path):
        path = str(tmp_path / "db.sqlite")
        with SQLiteStore(path):
            pass
        with SQLiteStore(path) as db:
            rows = db.conn.execute("SELECT version FROM schema_version").fetchall()
            assert len(rows) == 1

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "db.sqlite"
        with SQLiteStore(str(path)):
            pass
        assert path.exists()

# tests/test_store.py
"""Tests for the key-value stores."""

import json
import tempfile
from pathlib import Path

import pytest

from assetledger.errors import ReadOnlyStoreError, StoreError
from assetledger.store import FileStore, MemoryStore, ReadOnlyStore


@pytest.fixture
def store_dir():
    """Create temporary store directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(params=["memory", "file"])
def store(request, store_dir):
    """Each store implementation."""
    if request.param == "memory":
        return MemoryStore()
    return FileStore(store_dir)


def keys_of(pairs):
    return [key for key, _ in pairs]


class TestStoreContract:
    """Behaviour shared by all stores."""

    def test_get_missing(self, store):
        """Absent keys return None."""
        assert store.get("nope") is None

    def test_put_and_get(self, store):
        """Values come back as written."""
        store.put("k", b"value")
        assert store.get("k") == b"value"

    def test_put_replaces(self, store):
        """A second put overwrites."""
        store.put("k", b"one")
        store.put("k", b"two")
        assert store.get("k") == b"two"

    def test_delete(self, store):
        """Deleted keys are absent."""
        store.put("k", b"v")
        store.delete("k")
        assert store.get("k") is None

    def test_delete_missing_is_noop(self, store):
        """Deleting an absent key does nothing."""
        store.delete("nope")
        assert store.get("nope") is None

    def test_put_rejects_non_bytes(self, store):
        """Values must be bytes."""
        with pytest.raises(TypeError):
            store.put("k", "text")

    def test_put_rejects_empty_key(self, store):
        """Keys must be non-empty."""
        with pytest.raises(ValueError):
            store.put("", b"v")

    def test_scan_unbounded(self, store):
        """Empty bounds return every key in byte order."""
        for key in ["b", "a", "c", "B", "aa"]:
            store.put(key, key.encode())
        assert keys_of(store.scan_range("", "")) == ["B", "a", "aa", "b", "c"]

    def test_scan_bounds(self, store):
        """Start is inclusive, end is exclusive."""
        for i in range(10):
            store.put(f"asset{i}", b"x")
        assert keys_of(store.scan_range("asset2", "asset5")) == [
            "asset2", "asset3", "asset4",
        ]

    def test_scan_half_open(self, store):
        """One empty bound leaves that side open."""
        for key in ["a", "b", "c"]:
            store.put(key, b"x")
        assert keys_of(store.scan_range("b", "")) == ["b", "c"]
        assert keys_of(store.scan_range("", "b")) == ["a"]

    def test_scan_lexical_not_numeric(self, store):
        """asset10 sorts before asset2."""
        for key in ["asset2", "asset10", "asset1"]:
            store.put(key, b"x")
        assert keys_of(store.scan_range("", "")) == ["asset1", "asset10", "asset2"]

    def test_scan_empty_store(self, store):
        """An empty store scans to nothing."""
        assert list(store.scan_range("", "")) == []


class TestMemoryStore:
    """MemoryStore specifics."""

    def test_initial_state(self):
        """Initial values are loaded."""
        store = MemoryStore({"a": b"1", "b": b"2"})
        assert len(store) == 2
        assert "a" in store
        assert store.keys() == ["a", "b"]

    def test_initial_state_checked(self):
        """Initial values must be bytes."""
        with pytest.raises(TypeError):
            MemoryStore({"a": "1"})

    def test_scan_snapshot(self):
        """Keys deleted mid-scan are skipped, not errors."""
        store = MemoryStore({"a": b"1", "b": b"2", "c": b"3"})
        seen = []
        for key, _ in store.scan_range("", ""):
            seen.append(key)
            if key == "a":
                store.delete("b")
        assert seen == ["a", "c"]


class TestFileStore:
    """FileStore persistence."""

    def test_creates_directory(self, store_dir):
        """Store directory is created."""
        store = FileStore(store_dir / "nested" / "state")
        assert store.store_dir.exists()

    def test_persistence(self, store_dir):
        """State survives a new instance."""
        first = FileStore(store_dir)
        first.put("k", b"\x00\xffbinary")
        first.put("j", b"other")
        first.delete("j")

        second = FileStore(store_dir)
        assert second.get("k") == b"\x00\xffbinary"
        assert second.get("j") is None

    def test_file_format(self, store_dir):
        """Values are base64 in a versioned JSON file."""
        store = FileStore(store_dir)
        store.put("k", b"hello")
        data = json.loads((store_dir / "state.json").read_text())
        assert data == {"version": "1.0", "state": {"k": "aGVsbG8="}}

    def test_corrupt_file(self, store_dir):
        """A corrupt state file raises StoreError."""
        (store_dir / "state.json").write_text("{broken")
        with pytest.raises(StoreError):
            FileStore(store_dir)

    def test_bad_base64(self, store_dir):
        """Undecodable values raise StoreError."""
        (store_dir / "state.json").write_text('{"version": "1.0", "state": {"k": "!!"}}')
        with pytest.raises(StoreError):
            FileStore(store_dir)

    def test_invalid_utf8(self, store_dir):
        """A state file that is not UTF-8 raises StoreError."""
        (store_dir / "state.json").write_bytes(b'{"version": "1.0", "state": {"k": "\xff"}}')
        with pytest.raises(StoreError):
            FileStore(store_dir)

    def test_non_ascii_value(self, store_dir):
        """Non-ASCII characters in a value raise StoreError."""
        (store_dir / "state.json").write_text(
            '{"version": "1.0", "state": {"k": "é"}}', encoding="utf-8"
        )
        with pytest.raises(StoreError):
            FileStore(store_dir)

    def test_failed_save_restores_put(self, store_dir, monkeypatch):
        """If saving a put fails, the previous value stays in memory."""
        store = FileStore(store_dir)
        store.put("k", b"old")

        def failing_save():
            raise OSError("disk full")

        monkeypatch.setattr(store, "_save", failing_save)
        with pytest.raises(OSError):
            store.put("k", b"new")
        with pytest.raises(OSError):
            store.put("fresh", b"value")

        assert store.get("k") == b"old"
        assert store.get("fresh") is None

    def test_failed_save_restores_delete(self, store_dir, monkeypatch):
        """If saving a delete fails, the key stays in memory."""
        store = FileStore(store_dir)
        store.put("k", b"old")

        def failing_save():
            raise OSError("disk full")

        monkeypatch.setattr(store, "_save", failing_save)
        with pytest.raises(OSError):
            store.delete("k")

        assert store.get("k") == b"old"
        assert FileStore(store_dir).get("k") == b"old"


class TestReadOnlyStore:
    """ReadOnlyStore view."""

    def test_reads_pass_through(self):
        """get and scan reach the wrapped store."""
        inner = MemoryStore({"a": b"1", "b": b"2"})
        view = ReadOnlyStore(inner)
        assert view.get("a") == b"1"
        assert keys_of(view.scan_range("", "")) == ["a", "b"]

    def test_writes_refused(self):
        """put and delete raise and leave the store unchanged."""
        inner = MemoryStore({"a": b"1"})
        view = ReadOnlyStore(inner)
        with pytest.raises(ReadOnlyStoreError):
            view.put("a", b"2")
        with pytest.raises(ReadOnlyStoreError):
            view.delete("a")
        assert inner.get("a") == b"1"

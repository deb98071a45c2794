# assetledger/store.py
"""
Ordered key-value stores.

The registry talks to the ledger's world state only through the Store
contract: get / put / delete / scan_range over string keys and byte
values. A real ledger supplies its own implementation; MemoryStore and
FileStore are provided for local use and tests.

Keys are ordered byte-lexically by their UTF-8 encoding. Range scans
include start_key and exclude end_key, and an empty bound means
unbounded on that side.
"""

import base64
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .errors import ReadOnlyStoreError, StoreError

logger = logging.getLogger(__name__)


def _sort_key(key: str) -> bytes:
    return key.encode("utf-8")


def _in_range(key: str, start_key: str, end_key: str) -> bool:
    """Check key against [start_key, end_key), empty bounds are open."""
    encoded = _sort_key(key)
    if start_key and encoded < _sort_key(start_key):
        return False
    if end_key and encoded >= _sort_key(end_key):
        return False
    return True


class Store(ABC):
    """Contract the registry requires from the ledger's state store."""

    @abstractmethod
    def get(self, key: str) -> Optional[bytes]:
        """Return the value under key, or None if absent."""

    @abstractmethod
    def put(self, key: str, value: bytes) -> None:
        """Write value under key, replacing any previous value."""

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove key. Removing an absent key is a no-op."""

    @abstractmethod
    def scan_range(self, start_key: str, end_key: str) -> Iterator[Tuple[str, bytes]]:
        """Yield (key, value) pairs in [start_key, end_key) in key order."""


class MemoryStore(Store):
    """
    In-process store backed by a dict.

    Usage:
        store = MemoryStore()
        store.put("asset1", b"...")
        list(store.scan_range("", ""))
    """

    def __init__(self, initial: Dict[str, bytes] = None):
        self._state: Dict[str, bytes] = {}
        for key, value in (initial or {}).items():
            self._check_write(key, value)
            self._state[key] = value

    @staticmethod
    def _check_write(key: str, value: bytes):
        if not isinstance(key, str) or not key:
            raise ValueError("Store keys must be non-empty strings")
        if not isinstance(value, bytes):
            raise TypeError(f"Store values must be bytes, got {type(value).__name__}")

    def get(self, key: str) -> Optional[bytes]:
        value = self._state.get(key)
        logger.debug(f"get {key}: {'hit' if value is not None else 'miss'}")
        return value

    def put(self, key: str, value: bytes) -> None:
        self._check_write(key, value)
        self._state[key] = value
        logger.debug(f"put {key} ({len(value)} bytes)")

    def delete(self, key: str) -> None:
        self._state.pop(key, None)
        logger.debug(f"delete {key}")

    def scan_range(self, start_key: str, end_key: str) -> Iterator[Tuple[str, bytes]]:
        # Snapshot keys so writes during iteration don't change the result
        keys = sorted(
            (k for k in self._state if _in_range(k, start_key, end_key)),
            key=_sort_key,
        )
        for key in keys:
            value = self._state.get(key)
            if value is not None:
                yield key, value

    def keys(self) -> List[str]:
        """All keys in store order."""
        return sorted(self._state, key=_sort_key)

    def __contains__(self, key: str) -> bool:
        return key in self._state

    def __len__(self) -> int:
        return len(self._state)


class FileStore(MemoryStore):
    """
    MemoryStore persisted to a JSON file.

    Structure:
        store_dir/
            state.json    # {"version": "1.0", "state": {key: base64(value)}}

    The whole file is rewritten after every put or delete.
    """

    def __init__(self, store_dir: Path | str):
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)
        super().__init__()
        self._load()

    def _state_path(self) -> Path:
        return self.store_dir / "state.json"

    def _load(self):
        """Load state from disk."""
        state_path = self._state_path()
        if not state_path.exists():
            return
        try:
            with open(state_path, encoding="utf-8") as f:
                data = json.load(f)
            self._state = {
                key: base64.b64decode(encoded, validate=True)
                for key, encoded in data["state"].items()
            }
        # ValueError covers JSONDecodeError, UnicodeDecodeError and binascii.Error
        except (ValueError, KeyError, TypeError, AttributeError) as e:
            raise StoreError(f"Corrupt store file {state_path}: {e}") from e
        logger.debug(f"Loaded {len(self._state)} keys from {state_path}")

    def _save(self):
        """Save state to disk."""
        data = {
            "version": "1.0",
            "state": {
                key: base64.b64encode(self._state[key]).decode("ascii")
                for key in self.keys()
            },
        }
        with open(self._state_path(), "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def _save_or_restore(self, key: str, previous: Optional[bytes]):
        """Save state; if that fails, put key back to its previous value."""
        try:
            self._save()
        except Exception:
            if previous is None:
                self._state.pop(key, None)
            else:
                self._state[key] = previous
            raise

    def put(self, key: str, value: bytes) -> None:
        previous = self._state.get(key)
        super().put(key, value)
        self._save_or_restore(key, previous)

    def delete(self, key: str) -> None:
        previous = self._state.get(key)
        super().delete(key)
        self._save_or_restore(key, previous)


class ReadOnlyStore(Store):
    """View over another store that refuses writes."""

    def __init__(self, store: Store):
        self._store = store

    def get(self, key: str) -> Optional[bytes]:
        return self._store.get(key)

    def put(self, key: str, value: bytes) -> None:
        raise ReadOnlyStoreError(f"Cannot put {key}: store is read-only")

    def delete(self, key: str) -> None:
        raise ReadOnlyStoreError(f"Cannot delete {key}: store is read-only")

    def scan_range(self, start_key: str, end_key: str) -> Iterator[Tuple[str, bytes]]:
        return self._store.scan_range(start_key, end_key)

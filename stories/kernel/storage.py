"""
Stories Kernel — Persistent Value Store

Single string values under string keys, with a durable backend and an
in-memory one. StoredValue is what the app holds: it writes through on every
change and falls back to memory when the backend stops working.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from stories.kernel.types import StorageUnavailable

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------

class ValueStorage:
    """
    Abstract key/value interface.
    Implement with a file for durability, or in-memory for tests.
    """

    def get(self, key: str) -> str | None:
        """Fetch the value stored under key. Returns None if absent."""
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        raise NotImplementedError


class MemoryValueStorage(ValueStorage):
    """In-memory storage for testing."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class JsonFileStorage(ValueStorage):
    """
    All keys in one JSON object on disk.

    A missing file reads as empty. Writes go to a temp file in the same
    directory and are moved into place, so a crash never leaves half a file.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def _read(self) -> dict[str, str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise StorageUnavailable(f"cannot read {self.path}: {e}") from e

        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as e:
            raise StorageUnavailable(f"malformed store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageUnavailable(f"malformed store {self.path}: expected object")
        return data

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, sort_keys=True)
                os.replace(tmp, self.path)
            except BaseException:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageUnavailable(f"cannot write {self.path}: {e}") from e


# ---------------------------------------------------------------------------
# Owned value
# ---------------------------------------------------------------------------

class StoredValue:
    """
    One named value, initialized from storage and written back on every set.

    Falls back to `default` only when the key is absent. If the backend fails
    the value keeps living in memory and no further writes are attempted.
    """

    def __init__(self, storage: ValueStorage, key: str, default: str):
        self._storage = storage
        self.key = key
        self.degraded = False

        stored: str | None = None
        try:
            stored = storage.get(key)
        except (StorageUnavailable, OSError) as e:
            self._degrade("read", e)
        self._value = default if stored is None else stored

    @property
    def value(self) -> str:
        return self._value

    def set(self, value: str) -> None:
        """Update the value. Always writes through, even if unchanged."""
        self._value = value
        if self.degraded:
            return
        try:
            self._storage.set(self.key, value)
        except (StorageUnavailable, OSError) as e:
            self._degrade("write", e)

    def _degrade(self, op: str, err: Exception) -> None:
        logger.warning("storage: %s failed for key=%s, keeping value in memory: %s", op, self.key, err)
        self.degraded = True

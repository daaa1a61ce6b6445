"""
Persistent value store tests.

Backends: MemoryValueStorage, JsonFileStorage.
StoredValue: default on absent key, write-through on every set, degrade to
memory when the backend fails.
"""

import json
import logging

import pytest

from stories.kernel.storage import JsonFileStorage, MemoryValueStorage, StoredValue, ValueStorage
from stories.kernel.types import StorageUnavailable


class BrokenStorage(ValueStorage):
    """Backend whose medium has gone away."""

    def __init__(self, *, fail_get: bool = True, fail_set: bool = True) -> None:
        self.fail_get = fail_get
        self.fail_set = fail_set
        self.set_calls = 0

    def get(self, key):
        if self.fail_get:
            raise StorageUnavailable("no medium")
        return None

    def set(self, key, value):
        self.set_calls += 1
        if self.fail_set:
            raise StorageUnavailable("no medium")


class CountingStorage(MemoryValueStorage):
    def __init__(self, initial=None) -> None:
        super().__init__(initial)
        self.writes: list[tuple[str, str]] = []

    def set(self, key, value):
        self.writes.append((key, value))
        super().set(key, value)


# ============================================================================
# Backends
# ============================================================================


class TestMemoryValueStorage:
    def test_absent_key(self, storage):
        assert storage.get("search") is None

    def test_set_then_get(self, storage):
        storage.set("search", "redux")
        assert storage.get("search") == "redux"

    def test_get_then_set_same_value_is_idempotent(self):
        storage = MemoryValueStorage({"search": "react"})
        storage.set("search", storage.get("search"))
        assert storage.values == {"search": "react"}


class TestJsonFileStorage:
    def test_missing_file_reads_as_absent(self, tmp_path):
        assert JsonFileStorage(tmp_path / "store.json").get("search") is None

    def test_round_trip_through_a_fresh_instance(self, tmp_path):
        path = tmp_path / "store.json"
        JsonFileStorage(path).set("search", "redux")
        assert JsonFileStorage(path).get("search") == "redux"

    def test_keeps_other_keys(self, tmp_path):
        path = tmp_path / "store.json"
        store = JsonFileStorage(path)
        store.set("search", "redux")
        store.set("theme", "dark")
        assert json.loads(path.read_text()) == {"search": "redux", "theme": "dark"}

    def test_creates_parent_directories(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "store.json"
        JsonFileStorage(path).set("search", "x")
        assert path.exists()

    def test_no_temp_files_left_behind(self, tmp_path):
        path = tmp_path / "store.json"
        JsonFileStorage(path).set("search", "x")
        assert [p.name for p in tmp_path.iterdir()] == ["store.json"]

    def test_malformed_file_raises(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json")
        with pytest.raises(StorageUnavailable):
            JsonFileStorage(path).get("search")

    def test_non_object_file_raises(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("[1, 2]")
        with pytest.raises(StorageUnavailable):
            JsonFileStorage(path).get("search")

    def test_non_string_value_reads_as_absent(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text('{"search": 3}')
        assert JsonFileStorage(path).get("search") is None

    def test_unwritable_location_raises(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("")
        # parent "directory" is a regular file
        with pytest.raises(StorageUnavailable):
            JsonFileStorage(blocker / "store.json").set("search", "x")


# ============================================================================
# StoredValue
# ============================================================================


class TestStoredValue:
    def test_default_when_absent(self, storage):
        assert StoredValue(storage, "search", "React").value == "React"

    def test_stored_value_wins_over_default(self):
        storage = MemoryValueStorage({"search": "redux"})
        assert StoredValue(storage, "search", "React").value == "redux"

    def test_empty_string_is_a_stored_value(self):
        storage = MemoryValueStorage({"search": ""})
        assert StoredValue(storage, "search", "React").value == ""

    def test_initialization_does_not_write(self):
        storage = CountingStorage()
        StoredValue(storage, "search", "React")
        assert storage.writes == []

    def test_set_writes_through(self, storage):
        value = StoredValue(storage, "search", "React")
        value.set("redux")
        assert value.value == "redux"
        assert storage.get("search") == "redux"

    def test_redundant_set_still_writes(self):
        storage = CountingStorage()
        value = StoredValue(storage, "search", "React")
        value.set("redux")
        value.set("redux")
        assert storage.writes == [("search", "redux"), ("search", "redux")]

    def test_fresh_value_sees_previous_set(self, tmp_path):
        path = tmp_path / "store.json"
        StoredValue(JsonFileStorage(path), "search", "React").set("hooks")
        assert StoredValue(JsonFileStorage(path), "search", "React").value == "hooks"

    def test_read_failure_degrades_to_default(self, caplog):
        broken = BrokenStorage()
        with caplog.at_level(logging.WARNING, logger="stories.kernel.storage"):
            value = StoredValue(broken, "search", "React")
        assert value.value == "React"
        assert value.degraded
        assert "keeping value in memory" in caplog.text

    def test_degraded_value_stops_writing(self):
        broken = BrokenStorage()
        value = StoredValue(broken, "search", "React")
        value.set("redux")
        assert value.value == "redux"
        assert broken.set_calls == 0

    def test_write_failure_keeps_value_in_memory(self):
        broken = BrokenStorage(fail_get=False)
        value = StoredValue(broken, "search", "React")
        value.set("redux")
        value.set("hooks")
        assert value.value == "hooks"
        assert value.degraded
        assert broken.set_calls == 1

    def test_corrupt_file_degrades(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("garbage")
        value = StoredValue(JsonFileStorage(path), "search", "React")
        assert value.value == "React"
        assert value.degraded

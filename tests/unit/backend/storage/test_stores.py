"""
Unit Tests for key-value store backends.
"""

import pytest

from blogpad.backend.storage import JsonFileStore, KeyValueStore, MemoryStore, create_store


class TestMemoryStore:
    """Tests for the in-process store."""

    def test_get_missing_key_returns_none(self):
        assert MemoryStore().get("blogs") is None

    def test_set_overwrites(self):
        store = MemoryStore()
        store.set("blogs", "[1]")
        store.set("blogs", "[2]")

        assert store.get("blogs") == "[2]"

    def test_delete_missing_key_is_ignored(self):
        store = MemoryStore({"a": "1"})
        store.delete("b")
        store.delete("a")

        assert store.get("a") is None
        assert store.get("b") is None

    def test_initial_data_is_copied(self):
        initial = {"a": "1"}
        store = MemoryStore(initial)
        store.set("b", "2")

        assert initial == {"a": "1"}
        assert store.get("a") == "1"
        assert store.get("b") == "2"

    def test_satisfies_protocol(self):
        assert isinstance(MemoryStore(), KeyValueStore)


class TestJsonFileStore:
    """Tests for the file-backed store."""

    @pytest.fixture
    def store(self, tmp_path):
        """Store in a data directory that does not exist yet."""
        return JsonFileStore(tmp_path / "data")

    def test_get_missing_key_returns_none(self, store):
        assert store.get("blogs") is None

    def test_set_creates_directory_and_file(self, store, tmp_path):
        store.set("blogs", '[{"title": "สวัสดี"}]')

        path = tmp_path / "data" / "blogs.json"
        assert path.read_text(encoding="utf-8") == '[{"title": "สวัสดี"}]'
        assert store.get("blogs") == '[{"title": "สวัสดี"}]'

    def test_set_leaves_no_temporary_files(self, store, tmp_path):
        store.set("blogs", "[]")
        store.set("blogs", "[1]")

        assert [p.name for p in (tmp_path / "data").iterdir()] == ["blogs.json"]

    def test_delete_removes_file(self, store, tmp_path):
        store.set("blogs", "[]")
        store.delete("blogs")
        store.delete("blogs")

        assert store.get("blogs") is None
        assert not (tmp_path / "data" / "blogs.json").exists()

    def test_corrupt_backup_key_is_valid(self, store):
        """Dotted keys such as blogs.corrupt are allowed."""
        store.set("blogs.corrupt", "not json")

        assert store.get("blogs.corrupt") == "not json"

    @pytest.mark.parametrize("key", ["../escape", "a/b", "", ".."])
    def test_invalid_keys_are_rejected(self, store, key):
        with pytest.raises(ValueError, match="Invalid store key"):
            store.get(key)

    def test_satisfies_protocol(self, store):
        assert isinstance(store, KeyValueStore)

    def test_undecodable_bytes_survive_a_round_trip(self, store, tmp_path):
        """Bytes that are not UTF-8 come back as lone surrogates and are written back unchanged."""
        path = tmp_path / "data" / "blogs.json"
        path.parent.mkdir()
        path.write_bytes(b"[\xff\xfe]")

        raw = store.get("blogs")
        store.set("blogs.corrupt", raw)

        assert raw == "[\udcff\udcfe]"
        assert (tmp_path / "data" / "blogs.corrupt.json").read_bytes() == b"[\xff\xfe]"


class TestCreateStore:
    """Tests for the backend factory."""

    def test_memory_backend(self, tmp_path):
        assert isinstance(create_store("memory", tmp_path), MemoryStore)

    def test_file_backend(self, tmp_path):
        store = create_store("file", tmp_path)

        assert isinstance(store, JsonFileStore)
        assert store.data_dir == tmp_path

    def test_unknown_backend_raises(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown storage backend"):
            create_store("redis", tmp_path)

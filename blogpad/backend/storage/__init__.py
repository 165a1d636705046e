"""Key-value store backends."""

from pathlib import Path

from blogpad.backend.storage.base import KeyValueStore, MemoryStore
from blogpad.backend.storage.json_file import JsonFileStore


def create_store(backend: str, data_dir: Path) -> KeyValueStore:
    """Build the store named in storage.yaml."""
    if backend == "memory":
        return MemoryStore()
    if backend == "file":
        return JsonFileStore(data_dir)
    raise ValueError(f"Unknown storage backend: {backend}")


__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore", "create_store"]

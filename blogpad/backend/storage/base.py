"""
Key-Value Store Interface.

The entries live under one key of a text key-value store, the same shape
as browser local storage: get, set (full overwrite) and delete.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Text key-value store. Implementations raise OSError on I/O failure."""

    def get(self, key: str) -> str | None:
        """Return the stored value or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def delete(self, key: str) -> None:
        """Remove key. Missing keys are ignored."""
        ...


class MemoryStore:
    """In-process store for tests and the 'memory' backend."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

"""
Entry Service.

The collection manager: owns every Entry, keeps them sorted by last
update (newest first) and writes the full collection back to the store
after each add, update and delete.
"""

import time
from datetime import datetime
from typing import Callable

from blogpad.backend.core.exceptions import NotFoundError
from blogpad.backend.core.utils import utc_now
from blogpad.backend.models.entry import Entry
from blogpad.backend.repositories.entry import EntryRepository
from blogpad.backend.services.base import BaseService


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class EntryIdGenerator:
    """
    Monotonic integer ids seeded from the wall clock in milliseconds.

    Every id is greater than any id issued or observed before, so two
    entries created in the same millisecond still get distinct ids and a
    deleted id is never handed out again by this process.
    """

    def __init__(self, clock: Callable[[], int] = _epoch_millis) -> None:
        self._clock = clock
        self._last = 0

    def observe(self, existing_id: int) -> None:
        """Record an id already in use."""
        self._last = max(self._last, existing_id)

    def next_id(self) -> int:
        self._last = max(self._clock(), self._last + 1)
        return self._last


class EntryService(BaseService):
    """
    Service owning the entry collection.

    The collection is restored from the repository on construction.
    No validation happens here; callers check for non-empty title and
    content before calling add() or update().
    """

    def __init__(
        self,
        repo: EntryRepository,
        clock: Callable[[], datetime] = utc_now,
        id_generator: EntryIdGenerator | None = None,
    ) -> None:
        super().__init__()
        self.repo = repo
        self._clock = clock
        self._ids = id_generator or EntryIdGenerator()
        self._entries: list[Entry] = []
        self.restore()

    @property
    def entries(self) -> list[Entry]:
        """Snapshot of the collection, newest update first."""
        return list(self._entries)

    def add(self, title: str, content: str, tags: list[str]) -> Entry:
        """
        Create a new entry.

        Args:
            title: Entry title
            content: Entry content
            tags: Ordered tags

        Returns:
            Created entry
        """
        entry = Entry(
            id=self._ids.next_id(),
            title=title,
            content=content,
            tags=tags,
            created_at=self._clock(),
        )
        self._log_operation("Adding entry", entry_id=entry.id, title=title)

        self._entries.append(entry)
        self._sort()
        self.persist()
        return entry

    def update(
        self,
        entry_id: int,
        title: str,
        content: str,
        tags: list[str],
    ) -> Entry | None:
        """
        Replace an entry's title, content and tags.

        Args:
            entry_id: Entry to update
            title: New title
            content: New content
            tags: New tags

        Returns:
            Updated entry, or None if no entry has that id (nothing persisted)
        """
        entry = self.get(entry_id)
        if entry is None:
            self._log_debug("Update of unknown entry ignored", entry_id=entry_id)
            return None

        self._log_operation("Updating entry", entry_id=entry_id, title=title)

        entry.update(title, content, tags, now=self._clock())
        self._sort()
        self.persist()
        return entry

    def delete(self, entry_id: int) -> bool:
        """
        Remove an entry. Unknown ids are accepted silently.

        The collection is persisted either way.

        Returns:
            True if an entry was removed
        """
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        removed = len(remaining) != len(self._entries)
        self._entries = remaining

        self._log_operation("Deleting entry", entry_id=entry_id, removed=removed)
        self.persist()
        return removed

    def get(self, entry_id: int) -> Entry | None:
        """Get an entry by id, or None."""
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def require(self, entry_id: int) -> Entry:
        """
        Get an entry by id.

        Raises:
            NotFoundError: If no entry has that id
        """
        entry = self.get(entry_id)
        if entry is None:
            raise NotFoundError("Entry not found")
        return entry

    def all_tags(self) -> list[str]:
        """Every tag used by any entry, deduplicated and sorted."""
        return sorted({tag for entry in self._entries for tag in entry.tags})

    def filter_by_tag(self, tag: str | None = None) -> list[Entry]:
        """
        Entries carrying tag, in current order.

        An empty or missing tag returns the whole collection.
        """
        if not tag:
            return self.entries
        return [entry for entry in self._entries if tag in entry.tags]

    def persist(self) -> None:
        """Write the whole collection to the store, replacing the old value."""
        self._execute_store_operation("persist_entries", self.repo.save, self._entries)
        self._log_debug("Entries persisted", count=len(self._entries))

    def restore(self) -> None:
        """Reload the collection from the store."""
        entries = self._execute_store_operation("restore_entries", self.repo.load)
        for entry in entries:
            self._ids.observe(entry.id)
        self._entries = entries
        self._sort()

    def _sort(self) -> None:
        self._entries.sort(key=lambda entry: entry.updated_at, reverse=True)

"""
Entry Repository.

Data access layer for entries. The whole collection is one JSON array
stored under a single key of a key-value store, rewritten in full on
every save.
"""

import json
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from blogpad.backend.core.logging import get_logger
from blogpad.backend.models.entry import Entry
from blogpad.backend.schemas.entry import EntryRecord
from blogpad.backend.storage.base import KeyValueStore

logger = get_logger(__name__)


class EntryRepository:
    """
    Repository for the serialized entry collection.

    Unreadable data never raises from load(): a payload that is not
    UTF-8 or not a JSON array is copied to "<key>.corrupt" and treated
    as empty, and individual bad records are skipped.
    """

    def __init__(self, store: KeyValueStore, key: str = "blogs") -> None:
        self.store = store
        self.key = key

    @property
    def corrupt_key(self) -> str:
        return f"{self.key}.corrupt"

    def load(self) -> list[Entry]:
        """
        Read and rebuild every stored entry.

        Returns:
            Entries in stored order; empty if the key is absent or unreadable
        """
        raw = self.store.get(self.key)
        if raw is None:
            logger.debug("No stored entries", extra={"key": self.key})
            return []

        payload = self._decode(raw)
        if payload is None:
            return []

        entries: list[Entry] = []
        seen_ids: set[int] = set()
        for index, item in enumerate(payload):
            entry = self._to_entry(index, item)
            if entry is None:
                continue
            if entry.id in seen_ids:
                logger.warning(
                    "Skipping stored entry with duplicate id",
                    extra={"key": self.key, "index": index, "entry_id": entry.id},
                )
                continue
            seen_ids.add(entry.id)
            entries.append(entry)

        logger.info(
            "Entries restored",
            extra={"key": self.key, "count": len(entries), "stored": len(payload)},
        )
        return entries

    def save(self, entries: list[Entry]) -> None:
        """Overwrite the stored collection with entries."""
        records = [
            EntryRecord.model_validate(entry).model_dump(by_alias=True, mode="json")
            for entry in entries
        ]
        self.store.set(self.key, json.dumps(records, ensure_ascii=False))

    def _decode(self, raw: str) -> list[Any] | None:
        # undecodable bytes arrive as lone surrogates
        try:
            raw.encode("utf-8")
        except UnicodeEncodeError as e:
            self._quarantine(raw, f"invalid UTF-8 at position {e.start}")
            return None

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as e:
            self._quarantine(raw, f"invalid JSON: {e}")
            return None

        if not isinstance(payload, list):
            self._quarantine(raw, f"expected a JSON array, got {type(payload).__name__}")
            return None

        return payload

    def _quarantine(self, raw: str, reason: str) -> None:
        logger.error(
            "Stored entries are unreadable, starting empty",
            extra={"key": self.key, "backup_key": self.corrupt_key, "reason": reason},
        )
        self.store.set(self.corrupt_key, raw)

    def _to_entry(self, index: int, item: Any) -> Entry | None:
        try:
            record = EntryRecord.model_validate(item)
        except PydanticValidationError as e:
            logger.warning(
                "Skipping unreadable stored entry",
                extra={"key": self.key, "index": index, "error_count": e.error_count()},
            )
            return None

        return Entry(
            id=record.id,
            title=record.title,
            content=record.content,
            tags=record.tags,
            created_at=record.created_at,
            updated_at=max(record.updated_at, record.created_at),
        )

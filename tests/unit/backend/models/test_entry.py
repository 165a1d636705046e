"""
Unit Tests for the Entry model.
"""

from datetime import datetime, timedelta

from blogpad.backend.core.utils import utc_now
from blogpad.backend.models.entry import Entry


class TestEntryCreation:
    """Tests for constructing entries."""

    def test_updated_at_defaults_to_created_at(self):
        """A new entry has never been updated."""
        created = datetime(2026, 1, 1, 12, 0)
        entry = Entry(id=1, title="T", content="C", tags=["a"], created_at=created)

        assert entry.created_at == created
        assert entry.updated_at == created

    def test_created_at_defaults_to_now(self):
        """Missing created_at is filled from the UTC clock."""
        before = utc_now() - timedelta(seconds=1)
        entry = Entry(id=1, title="T", content="C")

        assert entry.created_at >= before
        assert entry.created_at.tzinfo is None
        assert entry.tags == []

    def test_tags_are_copied(self):
        """Mutating the caller's list does not change the entry."""
        tags = ["a", "b"]
        entry = Entry(id=1, title="T", content="C", tags=tags)
        tags.append("c")

        assert entry.tags == ["a", "b"]

    def test_repr_names_id_and_title(self):
        entry = Entry(id=7, title="Hello", content="C")

        assert repr(entry) == "<Entry(id=7, title='Hello')>"


class TestEntryUpdate:
    """Tests for Entry.update."""

    def test_update_replaces_fields_and_bumps_updated_at(self):
        """Should replace title, content, tags and set updated_at."""
        created = datetime(2026, 1, 1, 12, 0)
        later = created + timedelta(minutes=5)
        entry = Entry(id=1, title="A", content="body1", tags=["x"], created_at=created)

        entry.update("A2", "body2", [], now=later)

        assert entry.title == "A2"
        assert entry.content == "body2"
        assert entry.tags == []
        assert entry.created_at == created
        assert entry.updated_at == later

    def test_update_never_moves_updated_at_backwards(self):
        """A clock that went backwards keeps the previous updated_at."""
        created = datetime(2026, 1, 1, 12, 0)
        entry = Entry(id=1, title="A", content="B", created_at=created)

        entry.update("A", "B", [], now=created - timedelta(hours=1))

        assert entry.updated_at == created

    def test_update_accepts_empty_values(self):
        """Validation is the caller's job."""
        entry = Entry(id=1, title="A", content="B", created_at=datetime(2026, 1, 1))

        entry.update("", "", [], now=datetime(2026, 1, 2))

        assert entry.title == ""
        assert entry.content == ""


class TestEntryFormatting:
    """Tests for the localized updated_at label."""

    def test_default_is_thai_in_bangkok(self):
        entry = Entry(id=1, title="A", content="B", created_at=datetime(2026, 10, 17, 7, 5))

        assert entry.formatted_updated_at() == "17 ตุลาคม 2569 เวลา 14:05 น."

    def test_explicit_locale_and_timezone(self):
        entry = Entry(id=1, title="A", content="B", created_at=datetime(2026, 10, 17, 7, 5))

        assert entry.formatted_updated_at("en_GB", "UTC") == "17 October 2026 at 07:05"

"""
Entry Model.

One post: title, content, ordered tags and its two timestamps.
Entries are created, mutated and destroyed only by EntryService.
"""

from dataclasses import dataclass, field
from datetime import datetime

from blogpad.backend.core.utils import format_long_datetime, utc_now


@dataclass
class Entry:
    """
    A single blog post.

    created_at is set once; updated_at starts equal to it and is bumped by
    every update(). Timestamps are timezone-naive UTC.
    """

    id: int
    title: str
    content: str
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.created_at is None:
            self.created_at = utc_now()
        if self.updated_at is None:
            self.updated_at = self.created_at
        self.tags = list(self.tags)

    def update(
        self,
        title: str,
        content: str,
        tags: list[str],
        now: datetime | None = None,
    ) -> None:
        """Replace title, content and tags and bump updated_at. No validation."""
        self.title = title
        self.content = content
        self.tags = list(tags)
        # never move backwards, keeps updated_at >= created_at
        self.updated_at = max(now or utc_now(), self.updated_at)

    def formatted_updated_at(
        self,
        locale: str = "th_TH",
        timezone: str = "Asia/Bangkok",
    ) -> str:
        """Long local date and time of the last update."""
        return format_long_datetime(self.updated_at, locale, timezone)

    def __repr__(self) -> str:
        return f"<Entry(id={self.id}, title={self.title!r})>"

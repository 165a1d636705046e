"""
Entry Schemas.

Pydantic schemas for the stored entry record and for entry API
request/response validation.
"""

from datetime import datetime, timezone

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class EntryRecord(BaseModel):
    """
    One element of the JSON array kept under the entries key.

    Written with camelCase timestamp keys. The createdDate/updatedDate keys
    of browser local-storage exports are accepted on read.
    """

    id: int
    title: str
    content: str
    tags: list[str] = Field(default_factory=list)
    created_at: datetime = Field(
        validation_alias=AliasChoices("createdAt", "createdDate", "created_at"),
        serialization_alias="createdAt",
    )
    updated_at: datetime = Field(
        validation_alias=AliasChoices("updatedAt", "updatedDate", "updated_at"),
        serialization_alias="updatedAt",
    )

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _naive_utc(cls, value: datetime) -> datetime:
        # "2024-01-01T10:00:00.000Z" from browser exports parses as aware
        if value.tzinfo is not None:
            try:
                value = value.astimezone(timezone.utc).replace(tzinfo=None)
            except OverflowError as e:
                raise ValueError(f"timestamp out of range: {value.isoformat()}") from e
        return value


class EntryCreate(BaseModel):
    """Schema for creating a new entry."""

    title: str = Field(
        ...,
        min_length=1,
        description="Entry title",
        examples=["My First Post"],
    )
    content: str = Field(
        ...,
        min_length=1,
        description="Entry content, line breaks allowed",
        examples=["Hello\nworld"],
    )
    tags: list[str] = Field(
        default_factory=list,
        description="Ordered tags, duplicates allowed",
        examples=[["python", "notes"]],
    )

    @field_validator("title", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("tags")
    @classmethod
    def _clean_tags(cls, value: list[str]) -> list[str]:
        return [tag.strip() for tag in value if tag.strip()]


class EntryUpdate(EntryCreate):
    """Schema for replacing an entry's title, content and tags."""


class EntryResponse(BaseModel):
    """Schema for an entry in API responses."""

    id: int = Field(description="Entry identifier")
    title: str = Field(description="Entry title")
    content: str = Field(description="Entry content")
    tags: list[str] = Field(description="Entry tags")
    created_at: datetime = Field(description="Creation timestamp (UTC)")
    updated_at: datetime = Field(description="Last update timestamp (UTC)")
    updated_label: str = Field(description="Localized last update time")

    model_config = ConfigDict(from_attributes=True)

"""Post data passed from the content API to the site renderer."""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# The API emits offsets as +0000; ISO 8601 parsers want +00:00.
_COMPACT_OFFSET = re.compile(r"([+-]\d{2})(\d{2})$")


def _normalize_timestamp(value: Any) -> Any:
    if isinstance(value, str):
        return _COMPACT_OFFSET.sub(r"\1:\2", value.strip())
    return value


class Mark(BaseModel):
    """Inline formatting over a character range of a TextSpan."""

    model_config = ConfigDict(frozen=True)

    start: int
    end: int
    type: str
    data: dict[str, Any] = Field(default_factory=dict)


class TextSpan(BaseModel):
    """One rich-text element (paragraph, heading, list item, image...)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: str = "paragraph"
    text: str = ""
    marks: list[Mark] = Field(default_factory=list, alias="spans")
    url: str | None = None  # image
    alt: str | None = None  # image
    oembed: dict[str, Any] | None = None  # embed

    @field_validator("text", mode="before")
    @classmethod
    def coerce_null_text(cls, value: Any) -> Any:
        return "" if value is None else value


class ContentBlock(BaseModel):
    """A heading plus its rich-text body, in authoring order."""

    model_config = ConfigDict(frozen=True)

    heading: str = ""
    body: list[TextSpan] = Field(default_factory=list)

    @field_validator("heading", mode="before")
    @classmethod
    def coerce_null_heading(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("body", mode="before")
    @classmethod
    def coerce_null_body(cls, value: Any) -> Any:
        return [] if value is None else value


class PostSummary(BaseModel):
    """Listing entry for a post."""

    model_config = ConfigDict(frozen=True)

    uid: str
    publication_date: datetime | None = None
    title: str
    subtitle: str | None = None
    author: str

    @field_validator("publication_date", mode="before")
    @classmethod
    def parse_timestamp(cls, value: Any) -> Any:
        return _normalize_timestamp(value)


class PostDetail(BaseModel):
    """A full post as rendered on its own page."""

    model_config = ConfigDict(frozen=True)

    id: str
    uid: str
    publication_date: datetime | None = None
    last_modified_date: datetime | None = None
    title: str
    subtitle: str | None = None
    author: str
    banner_url: str | None = None
    content: list[ContentBlock] = Field(default_factory=list)

    @field_validator("publication_date", "last_modified_date", mode="before")
    @classmethod
    def parse_timestamps(cls, value: Any) -> Any:
        return _normalize_timestamp(value)


class PostsPage(BaseModel):
    """One page of listing results plus the cursor for the next one."""

    model_config = ConfigDict(frozen=True)

    results: list[PostSummary]
    next_cursor: str | None = None


class PageLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    href: str


class Pagination(BaseModel):
    """Links to the neighbouring posts by publication date."""

    model_config = ConfigDict(frozen=True)

    previous: PageLink | None = None
    next: PageLink | None = None

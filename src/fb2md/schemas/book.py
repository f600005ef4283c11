"""Book-level models: header metadata and embedded images."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BookMetadata(BaseModel):
    """Title, authors and cover reference from the title-info header."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    authors: list[str] = Field(default_factory=list)
    cover_ref: str = ""


class ImageRecord(BaseModel):
    """A ``<binary>`` block keyed by its lower-cased identifier."""

    model_config = ConfigDict(frozen=True)

    identifier: str
    content_type: str = "image/jpeg"
    data: str = ""

    @property
    def is_blank(self) -> bool:
        return not self.data.strip()

"""Section tree models."""

from __future__ import annotations

from bs4.element import Tag
from pydantic import BaseModel, ConfigDict, Field


class ContentItem(BaseModel):
    """A direct child of a section, kept as its source element."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    element: Tag


class Paragraph(ContentItem):
    """A ``<p>`` element with mixed text and inline markup."""


class ImageReference(ContentItem):
    """An ``<image>`` element; ``href`` is the link target as written."""

    href: str = ""


class FlatSection(BaseModel):
    """A section without its children, as produced by flattening."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    title: str = ""
    body: list[ContentItem] = Field(default_factory=list)
    epigraphs: list[list[Paragraph]] = Field(default_factory=list)
    depth: int = Field(..., ge=1)


class SectionNode(FlatSection):
    """A hierarchical section node."""

    children: list["SectionNode"] = Field(default_factory=list)

    def flat(self) -> FlatSection:
        return FlatSection(
            title=self.title,
            body=self.body,
            epigraphs=self.epigraphs,
            depth=self.depth,
        )

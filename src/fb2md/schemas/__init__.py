"""Shared schemas for fb2md."""

from fb2md.schemas.book import BookMetadata, ImageRecord
from fb2md.schemas.conversion import ConversionResult
from fb2md.schemas.sections import (
    ContentItem,
    FlatSection,
    ImageReference,
    Paragraph,
    SectionNode,
)

__all__ = [
    "BookMetadata",
    "ContentItem",
    "ConversionResult",
    "FlatSection",
    "ImageRecord",
    "ImageReference",
    "Paragraph",
    "SectionNode",
]

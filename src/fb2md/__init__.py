"""fb2md: convert FB2 e-books into Markdown notes."""

from fb2md.conversion import ConversionOptions, convert_fb2
from fb2md.exceptions import (
    ConversionError,
    Fb2mdError,
    ImageDecodeError,
    ParseError,
)
from fb2md.fb2_parser import ParsedFb2, parse_fb2
from fb2md.output_formatter import render_book
from fb2md.schemas import BookMetadata, ConversionResult, ImageRecord, SectionNode
from fb2md.storage import VaultStorage

__all__ = [
    "BookMetadata",
    "ConversionError",
    "ConversionOptions",
    "ConversionResult",
    "Fb2mdError",
    "ImageDecodeError",
    "ImageRecord",
    "ParseError",
    "ParsedFb2",
    "SectionNode",
    "VaultStorage",
    "convert_fb2",
    "parse_fb2",
    "render_book",
]

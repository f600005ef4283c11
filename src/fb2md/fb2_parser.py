"""Parse FB2 XML into metadata, footnotes, images, and section structure."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from fb2md.exceptions import ConversionError
from fb2md.footnotes import extract_footnotes
from fb2md.images import build_image_registry
from fb2md.metadata import extract_metadata
from fb2md.schemas import BookMetadata, ImageRecord, SectionNode
from fb2md.sections import build_sections
from fb2md.xml_utils import find_main_bodies, load_document

logger = logging.getLogger(__name__)


@dataclass
class ParsedFb2:
    """Everything the renderer needs from one FB2 document."""

    metadata: BookMetadata
    footnotes: dict[str, str]
    images: dict[str, ImageRecord]
    sections: list[SectionNode]


def parse_fb2(data: bytes | str) -> ParsedFb2:
    """Extract metadata, footnotes, images, and the section tree.

    Raises:
        ParseError: If the source is not well-formed XML.
        ConversionError: If the document has no main ``<body>``.
    """
    soup = load_document(data)

    main_bodies = find_main_bodies(soup)
    if not main_bodies:
        raise ConversionError("No main <body> found in FB2.")

    sections = build_sections(main_bodies)
    if not sections:
        logger.warning("FB2 main body contains no <section> elements")

    return ParsedFb2(
        metadata=extract_metadata(soup),
        footnotes=extract_footnotes(soup),
        images=build_image_registry(soup),
        sections=sections,
    )

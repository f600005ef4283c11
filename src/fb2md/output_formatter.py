"""Format a parsed FB2 book into summary, tree, and Markdown content."""

from __future__ import annotations

import logging
from typing import Iterable

from fb2md.config import DEFAULT_FOOTNOTES_TITLE, DEFAULT_TOC_TITLE
from fb2md.exceptions import ImageDecodeError
from fb2md.images import find_image, materialize_image
from fb2md.markdown import format_paragraph
from fb2md.schemas import (
    BookMetadata,
    ConversionResult,
    FlatSection,
    ImageRecord,
    ImageReference,
    Paragraph,
    SectionNode,
)
from fb2md.sections import count_sections, flatten_sections, heading_level
from fb2md.storage import VaultStorage

logger = logging.getLogger(__name__)


class _ImageEmbedder:
    """Resolves image references and materializes them for one book."""

    def __init__(
        self,
        storage: VaultStorage,
        images: dict[str, ImageRecord],
        *,
        image_root: str,
        book_name: str,
    ) -> None:
        self.storage = storage
        self.images = images
        self.image_root = image_root
        self.book_name = book_name
        self.saved_paths: list[str] = []

    async def embed(self, reference: str | None) -> str | None:
        """Return a ``![[path]]`` embed, or None if the image is unusable."""
        record = find_image(self.images, reference)
        if record is None:
            logger.debug("Image reference %r not found", reference)
            return None
        if record.is_blank:
            logger.debug("Image %r has an empty payload", record.identifier)
            return None
        try:
            path = await materialize_image(
                self.storage,
                image_root=self.image_root,
                book_name=self.book_name,
                record=record,
            )
        except ImageDecodeError as exc:
            logger.warning("Skipping image: %s", exc)
            return None
        self.saved_paths.append(path)
        return f"![[{path}]]"


async def render_book(
    *,
    metadata: BookMetadata,
    sections: list[SectionNode],
    footnotes: dict[str, str],
    images: dict[str, ImageRecord],
    storage: VaultStorage,
    image_root: str,
    book_name: str,
    include_toc: bool = True,
    toc_title: str = DEFAULT_TOC_TITLE,
    footnotes_title: str = DEFAULT_FOOTNOTES_TITLE,
) -> ConversionResult:
    """Create summary, section tree, and Markdown content.

    Images referenced by the cover and the sections are written to storage
    as they are encountered, in document order.
    """
    flat_sections = flatten_sections(sections)
    embedder = _ImageEmbedder(storage, images, image_root=image_root, book_name=book_name)

    blocks: list[str] = []
    front_matter = render_front_matter(metadata)
    if front_matter:
        blocks.append(front_matter)

    cover = await _render_cover(metadata, embedder)
    if cover:
        blocks.append(cover)

    if include_toc:
        blocks.append(render_toc(flat_sections, toc_title))

    for section in flat_sections:
        blocks.extend(await _render_section(section, embedder))

    footnote_block = render_footnotes(footnotes, footnotes_title)
    if footnote_block:
        blocks.append(footnote_block)

    content = "\n\n".join(blocks).strip()
    tree = "Sections:\n" + _create_sections_tree(sections)

    summary_lines = []
    if metadata.title:
        summary_lines.append(f"Title: {metadata.title}")
    if metadata.authors:
        summary_lines.append(f"Authors: {', '.join(metadata.authors)}")
    summary_lines.append(f"Sections: {count_sections(sections)}")
    summary_lines.append(f"Footnotes: {len(footnotes)}")
    summary_lines.append(f"Images: {len(embedder.saved_paths)}")

    return ConversionResult(
        summary="\n".join(summary_lines),
        sections_tree=tree,
        content=content,
        image_paths=embedder.saved_paths,
    )


def render_front_matter(metadata: BookMetadata) -> str | None:
    """YAML front matter with only the fields that are present."""
    lines = []
    if metadata.title:
        lines.append(f"title: {_quote(metadata.title)}")
    if metadata.authors:
        authors = ", ".join(_quote(author) for author in metadata.authors)
        lines.append(f"authors: [{authors}]")
    if not lines:
        return None
    return "\n".join(["---", *lines, "---"])


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


async def _render_cover(metadata: BookMetadata, embedder: _ImageEmbedder) -> str | None:
    if not metadata.cover_ref:
        return None
    if find_image(embedder.images, metadata.cover_ref) is None:
        logger.warning(
            "Cover not found. cover_ref=%r, available images: %s",
            metadata.cover_ref,
            sorted(embedder.images),
        )
        return None
    return await embedder.embed(metadata.cover_ref)


def render_toc(sections: Iterable[FlatSection], toc_title: str) -> str:
    """Contents heading plus one self-link per titled section."""
    lines = [f"# {toc_title}"]
    for section in sections:
        title = section.title.strip()
        if title:
            lines.append(f"- [[#{title}|{title}]]")
    return "\n".join(lines)


async def _render_section(section: FlatSection, embedder: _ImageEmbedder) -> list[str]:
    blocks: list[str] = []
    title = section.title.strip()
    # An untitled section gets an empty block, i.e. a blank separator line.
    blocks.append(f"{'#' * heading_level(section.depth)} {title}" if title else "")

    for epigraph in section.epigraphs:
        blocks.append(render_epigraph(epigraph))

    for item in section.body:
        if isinstance(item, ImageReference):
            embed = await embedder.embed(item.href)
            if embed:
                blocks.append(embed)
        elif isinstance(item, Paragraph):
            text = format_paragraph(item.element)
            if text:
                blocks.append(text)
        else:
            text = item.element.get_text().strip()
            if text:
                blocks.append(text)
    return blocks


def render_epigraph(paragraphs: Iterable[Paragraph]) -> str:
    lines = [">"]
    for paragraph in paragraphs:
        lines.append(f"> {format_paragraph(paragraph.element)}")
    lines.append(">")
    return "\n".join(lines)


def render_footnotes(footnotes: dict[str, str], footnotes_title: str) -> str | None:
    """Footnote heading and definitions; None when there are no notes."""
    if not footnotes:
        return None
    lines = [f"## {footnotes_title}", ""]
    for footnote_id, text in footnotes.items():
        lines.append(f"[^{footnote_id}]: {text}")
    return "\n".join(lines)


def _create_sections_tree(sections: list[SectionNode], indent: int = 0) -> str:
    lines: list[str] = []
    for section in sections:
        lines.append(" " * (indent * 4) + (section.title or "(untitled)"))
        if section.children:
            lines.append(_create_sections_tree(section.children, indent + 1))
    return "\n".join(lines)

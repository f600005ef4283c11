"""Build and flatten the FB2 section tree."""

from __future__ import annotations

from typing import Iterable

from bs4.element import Tag

from fb2md.schemas import ContentItem, FlatSection, ImageReference, Paragraph, SectionNode
from fb2md.xml_utils import child_tags, first_child, get_href, normalize_text, tag_name

MAX_HEADING_LEVEL = 6


def build_sections(bodies: Iterable[Tag]) -> list[SectionNode]:
    """Build root nodes for the top-level sections of every main body."""
    roots: list[SectionNode] = []
    for body in bodies:
        for section in child_tags(body, "section"):
            roots.append(build_section(section, 1))
    return roots


def build_section(element: Tag, depth: int) -> SectionNode:
    """Recursively convert a ``<section>`` element into a ``SectionNode``."""
    return SectionNode(
        title=section_title(element),
        body=[_content_item(child) for child in child_tags(element, "p", "image")],
        epigraphs=[
            [Paragraph(element=p) for p in epigraph.find_all("p")]
            for epigraph in child_tags(element, "epigraph")
        ],
        depth=depth,
        children=[build_section(child, depth + 1) for child in child_tags(element, "section")],
    )


def section_title(element: Tag) -> str:
    """Resolve a title from ``title > p``, then ``title``, then ``""``.

    Whitespace runs are collapsed so multi-line titles fit on a heading line.
    """
    title = first_child(element, "title")
    if title is None:
        return ""
    paragraph = first_child(title, "p")
    if paragraph is not None:
        text = normalize_text(paragraph.get_text())
        if text:
            return text
    return normalize_text(title.get_text())


def _content_item(element: Tag) -> ContentItem:
    name = tag_name(element)
    if name == "p":
        return Paragraph(element=element)
    if name == "image":
        return ImageReference(element=element, href=get_href(element) or "")
    return ContentItem(element=element)


def flatten_sections(sections: Iterable[SectionNode]) -> list[FlatSection]:
    """Linearize the tree in pre-order: each node, then its descendants."""
    result: list[FlatSection] = []

    def _visit(nodes: Iterable[SectionNode]) -> None:
        for node in nodes:
            result.append(node.flat())
            _visit(node.children)

    _visit(sections)
    return result


def count_sections(sections: Iterable[SectionNode]) -> int:
    """Count total sections in the tree."""
    total = 0
    for section in sections:
        total += 1
        total += count_sections(section.children)
    return total


def heading_level(depth: int) -> int:
    """Depth-1 sections become ``##``; level 1 is left to the book title."""
    return min(depth + 1, MAX_HEADING_LEVEL)

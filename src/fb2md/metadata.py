"""Extract book metadata from the FB2 ``title-info`` header."""

from __future__ import annotations

from bs4 import BeautifulSoup
from bs4.element import Tag

from fb2md.schemas import BookMetadata
from fb2md.xml_utils import get_href, normalize_text, strip_ref


def extract_metadata(soup: BeautifulSoup) -> BookMetadata:
    """Extract title, authors, and cover reference from the header.

    Every field is optional; a document without ``description/title-info``
    yields empty metadata.
    """
    title_info = _find_title_info(soup)
    if title_info is None:
        return BookMetadata()

    return BookMetadata(
        title=_extract_title(title_info),
        authors=_extract_authors(title_info),
        cover_ref=_extract_cover_ref(title_info),
    )


def _find_title_info(soup: BeautifulSoup) -> Tag | None:
    description = soup.find("description")
    if not isinstance(description, Tag):
        return None
    title_info = description.find("title-info")
    return title_info if isinstance(title_info, Tag) else None


def _extract_title(title_info: Tag) -> str:
    title_tag = title_info.find("book-title")
    if not title_tag:
        return ""
    return normalize_text(title_tag.get_text())


def _extract_authors(title_info: Tag) -> list[str]:
    authors: list[str] = []
    for author in title_info.find_all("author"):
        parts = [_child_text(author, "first-name"), _child_text(author, "last-name")]
        name = " ".join(part for part in parts if part)
        if name:
            authors.append(name)
    return authors


def _child_text(tag: Tag, name: str) -> str:
    child = tag.find(name)
    return normalize_text(child.get_text()) if child else ""


def _extract_cover_ref(title_info: Tag) -> str:
    coverpage = title_info.find("coverpage")
    if not coverpage:
        return ""
    for image in coverpage.find_all("image"):
        ref = strip_ref(get_href(image))
        if ref:
            return ref
    return ""

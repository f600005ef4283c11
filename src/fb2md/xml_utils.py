"""Shared XML utilities for FB2 document processing."""

from __future__ import annotations

import re

from lxml import etree

from fb2md.exceptions import ParseError

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for FB2 parsing (pip install beautifulsoup4)."
    ) from exc


_WHITESPACE_RE = re.compile(r"\s+")
_XML_DECL_ENCODING_RE = re.compile(r"""^(\ufeff?\s*<\?xml\b[^>]*?)\s+encoding\s*=\s*["'][^"']*["']""")
_NOTES_BODY_TYPE = "notes"


def load_document(data: bytes | str) -> BeautifulSoup:
    """Parse FB2 source into a soup, rejecting malformed XML.

    BeautifulSoup's XML builder recovers from broken markup silently, so the
    source is first checked for well-formedness with lxml directly.

    Bytes are decoded per the XML declaration. Text is already decoded, so its
    declared encoding is dropped and the text is parsed as UTF-8.
    """
    if isinstance(data, str):
        raw = _XML_DECL_ENCODING_RE.sub(r"\1", data, count=1).encode("utf-8")
    else:
        raw = data
    try:
        parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
        etree.fromstring(raw, parser=parser)
    except (etree.XMLSyntaxError, ValueError) as exc:
        raise ParseError(f"Invalid XML format: {exc}") from exc
    return BeautifulSoup(raw, "xml")


def normalize_text(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def collapse_whitespace(text: str) -> str:
    """Collapse whitespace runs to one space without trimming the ends."""
    return _WHITESPACE_RE.sub(" ", text)


def tag_name(tag: Tag) -> str:
    return (tag.name or "").lower()


def child_tags(tag: Tag, *names: str) -> list[Tag]:
    """Return direct element children, optionally restricted to ``names``."""
    wanted = set(names)
    return [
        child
        for child in tag.children
        if isinstance(child, Tag) and (not wanted or tag_name(child) in wanted)
    ]


def first_child(tag: Tag, name: str) -> Tag | None:
    children = child_tags(tag, name)
    return children[0] if children else None


def get_href(tag: Tag) -> str | None:
    """Read a link target, preferring a namespaced ``l:href``/``xlink:href``."""
    for key, value in tag.attrs.items():
        if str(key).endswith(":href"):
            return value
    return tag.get("href")


def strip_ref(href: str | None) -> str:
    """Normalise a ``#id`` link target into a lower-cased lookup key."""
    if not href:
        return ""
    return href.strip().removeprefix("#").lower()


def is_notes_body(body: Tag) -> bool:
    return body.get("type") == _NOTES_BODY_TYPE


def find_bodies(soup: BeautifulSoup) -> list[Tag]:
    return list(soup.find_all("body"))


def find_main_bodies(soup: BeautifulSoup) -> list[Tag]:
    """Return every ``<body>`` not marked as the notes partition, in order."""
    return [body for body in find_bodies(soup) if not is_notes_body(body)]


def find_notes_body(soup: BeautifulSoup) -> Tag | None:
    for body in find_bodies(soup):
        if is_notes_body(body):
            return body
    return None

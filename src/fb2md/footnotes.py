"""Collect footnote texts from the notes body."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from fb2md.xml_utils import child_tags, find_notes_body, normalize_text

logger = logging.getLogger(__name__)


def extract_footnotes(soup: BeautifulSoup) -> dict[str, str]:
    """Map note ids to their text.

    Only the direct ``<p>`` children of each note section are read; poems,
    citations and nested sections inside a note are not part of its text.
    """
    footnotes: dict[str, str] = {}
    notes_body = find_notes_body(soup)
    if notes_body is None:
        return footnotes

    for section in notes_body.find_all("section"):
        note_id = section.get("id")
        if not note_id:
            continue
        paragraphs = [normalize_text(p.get_text()) for p in child_tags(section, "p")]
        footnotes[note_id] = " ".join(paragraphs)

    logger.debug("Collected %d footnotes", len(footnotes))
    return footnotes

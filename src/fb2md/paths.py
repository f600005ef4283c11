"""Output naming and collision-free path selection."""

from __future__ import annotations

import re

from fb2md.schemas import BookMetadata
from fb2md.storage import VaultStorage

_ILLEGAL_PATH_CHARS_RE = re.compile(r'[\\/:*?"<>|#^\[\]\x00-\x1f\x7f]')
_WHITESPACE_RE = re.compile(r"\s+")


def sanitize_filename(name: str) -> str:
    """Remove characters that are illegal in file names or in wiki links.

    Besides OS-reserved characters this drops ``# ^ [ ] |``, which the vault
    reads as link syntax inside ``![[path]]`` embeds.
    """
    # Line breaks and tabs become spaces before control characters go.
    cleaned = _ILLEGAL_PATH_CHARS_RE.sub("", _WHITESPACE_RE.sub(" ", name))
    cleaned = _WHITESPACE_RE.sub(" ", cleaned)
    return cleaned.strip(" .")


def book_basename(metadata: BookMetadata, fallback: str) -> str:
    """Derive the note name from authors and title.

    ``"<authors> - <title>"`` when both exist, otherwise whichever exists,
    otherwise ``fallback`` (the source file's own name).
    """
    parts = []
    if metadata.authors:
        parts.append(", ".join(metadata.authors))
    if metadata.title:
        parts.append(metadata.title)
    name = sanitize_filename(" - ".join(parts))
    return name or sanitize_filename(fallback) or "book"


def join_path(*parts: str) -> str:
    """Join vault path segments, skipping empty ones."""
    cleaned = [part.strip("/") for part in parts if part and part.strip("/")]
    return "/".join(cleaned)


async def available_path(
    storage: VaultStorage, folder: str, base_name: str, extension: str
) -> str:
    """Return ``folder/base_name.extension``, suffixed ``_1``, ``_2``... if taken."""
    candidate = join_path(folder, f"{base_name}.{extension}")
    counter = 1
    while await storage.exists(candidate):
        candidate = join_path(folder, f"{base_name}_{counter}.{extension}")
        counter += 1
    return candidate

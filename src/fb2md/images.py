"""Embedded image registry and materialization into the vault."""

from __future__ import annotations

import base64
import binascii
import logging
import re

from bs4 import BeautifulSoup

from fb2md.exceptions import ImageDecodeError
from fb2md.paths import available_path, join_path
from fb2md.schemas import ImageRecord
from fb2md.storage import VaultStorage
from fb2md.xml_utils import strip_ref

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "image/jpeg"
DEFAULT_EXTENSION = "jpg"
DEFAULT_IMAGE_NAME = "image"

_UNSAFE_NAME_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]")


def build_image_registry(soup: BeautifulSoup) -> dict[str, ImageRecord]:
    """Collect every ``<binary>`` block keyed by its lower-cased id.

    Blank payloads are kept here and rejected by the caller at the point of
    use.
    """
    registry: dict[str, ImageRecord] = {}
    for binary in soup.find_all("binary"):
        identifier = (binary.get("id") or "").lower()
        registry[identifier] = ImageRecord(
            identifier=identifier,
            content_type=binary.get("content-type") or DEFAULT_CONTENT_TYPE,
            data=binary.get_text(),
        )
    logger.debug("Registered %d embedded images", len(registry))
    return registry


def find_image(registry: dict[str, ImageRecord], reference: str | None) -> ImageRecord | None:
    """Look up an image by a ``#id`` style reference.

    Matching is case-insensitive. If the full reference misses and contains
    a dot, the part before the first dot is tried (``cover.jpg`` -> ``cover``).
    """
    key = strip_ref(reference)
    if not key:
        return None
    record = registry.get(key)
    if record is None and "." in key:
        record = registry.get(key.split(".", 1)[0])
    return record


def image_extension(content_type: str) -> str:
    """``image/png`` -> ``png``; no subtype -> ``jpg``."""
    _, _, subtype = content_type.partition("/")
    return subtype.strip().lower() or DEFAULT_EXTENSION


def safe_image_name(identifier: str) -> str:
    return _UNSAFE_NAME_CHARS_RE.sub("_", identifier) or DEFAULT_IMAGE_NAME


def decode_image(record: ImageRecord) -> bytes:
    """Decode the base64 payload, ignoring line breaks and other noise.

    Raises:
        ImageDecodeError: If the payload is not valid base64.
    """
    try:
        return base64.b64decode(record.data.strip())
    except (binascii.Error, ValueError) as exc:
        raise ImageDecodeError(
            f"Image '{record.identifier}' has an invalid base64 payload: {exc}"
        ) from exc


async def materialize_image(
    storage: VaultStorage,
    *,
    image_root: str,
    book_name: str,
    record: ImageRecord,
) -> str:
    """Write an image under ``image_root/book_name`` and return its vault path.

    The payload is decoded before anything touches storage. An existing file
    is never overwritten; a numeric suffix is added instead.
    """
    payload = decode_image(record)
    folder = join_path(image_root, book_name)
    await storage.create_folder(folder)

    path = await available_path(
        storage,
        folder,
        safe_image_name(record.identifier),
        image_extension(record.content_type),
    )
    await storage.create_binary(path, payload)
    logger.debug("Saved image %s to %s", record.identifier, path)
    return path

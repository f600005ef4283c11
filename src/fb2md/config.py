"""Local configuration for fb2md."""

from __future__ import annotations

import os


DEFAULT_VAULT_PATH = "."
DEFAULT_IMAGE_FOLDER = "fb2-images"
DEFAULT_OUTPUT_FOLDER = ""
DEFAULT_TOC_TITLE = "Contents"
DEFAULT_FOOTNOTES_TITLE = "Footnotes"

# Root folder every storage path is resolved against.
FB2MD_VAULT_PATH = os.getenv("FB2MD_VAULT_PATH", DEFAULT_VAULT_PATH)
FB2MD_IMAGE_FOLDER = os.getenv("FB2MD_IMAGE_FOLDER", DEFAULT_IMAGE_FOLDER).strip() or DEFAULT_IMAGE_FOLDER
FB2MD_OUTPUT_FOLDER = os.getenv("FB2MD_OUTPUT_FOLDER", DEFAULT_OUTPUT_FOLDER).strip()
FB2MD_TOC_TITLE = os.getenv("FB2MD_TOC_TITLE", DEFAULT_TOC_TITLE)
FB2MD_FOOTNOTES_TITLE = os.getenv("FB2MD_FOOTNOTES_TITLE", DEFAULT_FOOTNOTES_TITLE)

"""Conversion pipeline for FB2 -> Markdown notes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import PurePosixPath

from fb2md.config import (
    DEFAULT_IMAGE_FOLDER,
    FB2MD_FOOTNOTES_TITLE,
    FB2MD_IMAGE_FOLDER,
    FB2MD_OUTPUT_FOLDER,
    FB2MD_TOC_TITLE,
)
from fb2md.fb2_parser import parse_fb2
from fb2md.output_formatter import render_book
from fb2md.paths import available_path, book_basename
from fb2md.schemas import ConversionResult
from fb2md.storage import VaultStorage

logger = logging.getLogger(__name__)


@dataclass
class ConversionOptions:
    """Options for FB2 conversion.

    Attributes:
        image_folder: Vault folder that receives one sub-folder of images per
            book. Blank values fall back to ``fb2-images``.
        output_folder: Vault folder for the Markdown notes; empty means the
            vault root.
        include_toc: If False, the table of contents is left out.
        toc_title: Heading text of the table of contents.
        footnotes_title: Heading text of the trailing footnotes block.
    """

    image_folder: str = FB2MD_IMAGE_FOLDER
    output_folder: str = FB2MD_OUTPUT_FOLDER
    include_toc: bool = True
    toc_title: str = FB2MD_TOC_TITLE
    footnotes_title: str = FB2MD_FOOTNOTES_TITLE


async def convert_fb2(
    source: str,
    *,
    storage: VaultStorage,
    options: ConversionOptions | None = None,
) -> ConversionResult:
    """Read, parse, and render an FB2 book, then write it as a Markdown note.

    Args:
        source: Vault-relative path of the ``.fb2`` file.
        storage: Vault the source is read from and results are written to.
        options: Processing options. Uses defaults if None.

    Returns:
        The conversion result, with ``output_path`` set to the new note.

    Raises:
        ParseError: If the source is not well-formed XML.
        ConversionError: If the source has no main body.
    """
    opts = options or ConversionOptions()
    image_folder = opts.image_folder.strip() or DEFAULT_IMAGE_FOLDER
    output_folder = opts.output_folder.strip()

    data = await storage.read_bytes(source)
    parsed = parse_fb2(data)

    book_name = book_basename(parsed.metadata, PurePosixPath(source).stem)

    result = await render_book(
        metadata=parsed.metadata,
        sections=parsed.sections,
        footnotes=parsed.footnotes,
        images=parsed.images,
        storage=storage,
        image_root=image_folder,
        book_name=book_name,
        include_toc=opts.include_toc,
        toc_title=opts.toc_title,
        footnotes_title=opts.footnotes_title,
    )

    if output_folder:
        await storage.create_folder(output_folder)
    output_path = await available_path(storage, output_folder, book_name, "md")
    await storage.create_text(output_path, result.content)
    logger.info("FB2 converted: %s -> %s", source, output_path)

    return result.model_copy(update={"output_path": output_path})

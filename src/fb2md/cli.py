"""Command-line interface: convert FB2 books inside a vault folder."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from fb2md.config import (
    FB2MD_FOOTNOTES_TITLE,
    FB2MD_IMAGE_FOLDER,
    FB2MD_OUTPUT_FOLDER,
    FB2MD_TOC_TITLE,
    FB2MD_VAULT_PATH,
)
from fb2md.conversion import ConversionOptions, convert_fb2
from fb2md.exceptions import Fb2mdError
from fb2md.storage import VaultStorage


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fb2md", description="Convert FB2 e-books to Markdown notes.")
    parser.add_argument("--vault", default=FB2MD_VAULT_PATH, help="Vault root folder (default: %(default)s)")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging and print a conversion summary"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser("convert", help="Convert one .fb2 file")
    convert.add_argument("source", help="Path of the .fb2 file inside the vault")
    convert.add_argument("--image-folder", default=FB2MD_IMAGE_FOLDER, help="Vault folder for images")
    convert.add_argument("--output-folder", default=FB2MD_OUTPUT_FOLDER, help="Vault folder for notes")
    convert.add_argument("--toc-title", default=FB2MD_TOC_TITLE, help="Table of contents heading")
    convert.add_argument("--footnotes-title", default=FB2MD_FOOTNOTES_TITLE, help="Footnotes heading")
    convert.add_argument("--no-toc", action="store_true", help="Leave out the table of contents")

    subparsers.add_parser("list", help="List .fb2 files in the vault")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    storage = VaultStorage(args.vault)

    if args.command == "list":
        files = asyncio.run(storage.list_files(".fb2"))
        if not files:
            print("No .fb2 files found in the vault.")
        for name in files:
            print(name)
        return 0

    try:
        source = vault_relative(storage, args.source)
    except ValueError as exc:
        parser.error(str(exc))

    options = ConversionOptions(
        image_folder=args.image_folder,
        output_folder=args.output_folder,
        include_toc=not args.no_toc,
        toc_title=args.toc_title,
        footnotes_title=args.footnotes_title,
    )
    try:
        result = asyncio.run(convert_fb2(source, storage=storage, options=options))
    except Fb2mdError as exc:
        print(f"Error converting FB2: {exc}", file=sys.stderr)
        return 1
    except FileNotFoundError as exc:
        print(f"Error reading FB2: {exc}", file=sys.stderr)
        return 1

    print(f"FB2 converted: {result.output_path}")
    if args.verbose:
        print(result.summary)
        print(result.sections_tree)
    return 0


def vault_relative(storage: VaultStorage, source: str) -> str:
    """Express ``source`` relative to the vault root.

    Relative paths are taken relative to the current directory first and to
    the vault root when no such file exists there.
    """
    path = Path(source).expanduser()
    if not path.is_absolute():
        cwd_path = Path.cwd() / path
        path = cwd_path if cwd_path.exists() else storage.root / path
    try:
        return path.resolve().relative_to(storage.root).as_posix()
    except ValueError as exc:
        raise ValueError(f"{source} is not inside the vault {storage.root}") from exc


if __name__ == "__main__":
    sys.exit(main())

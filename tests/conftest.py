"""Test setup for fb2md."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from fb2md.storage import VaultStorage  # noqa: E402

FB2_HEADER = (
    '<?xml version="1.0" encoding="utf-8"?>\n'
    '<FictionBook xmlns="http://www.gribuser.ru/xml/fictionbook/2.0" '
    'xmlns:l="http://www.w3.org/1999/xlink">\n'
)

# base64 of the eight-byte PNG signature
PNG_PAYLOAD = "iVBORw0KGgo="
PNG_BYTES = b"\x89PNG\r\n\x1a\n"

SAMPLE_FB2 = (
    FB2_HEADER
    + """
 <description>
  <title-info>
   <author><first-name>Anna</first-name><last-name>Karenina</last-name></author>
   <author><first-name>Leo</first-name><last-name>Tolstoy</last-name></author>
   <book-title>Book</book-title>
   <coverpage><image l:href="#Cover.jpg"/></coverpage>
  </title-info>
 </description>
 <body>
  <section>
   <title><p>Chapter One</p></title>
   <epigraph><p>All happy families.</p><text-author>Someone</text-author></epigraph>
   <p>First <emphasis>paragraph</emphasis> with a note<a l:href="#note7" type="note">[1]</a>.</p>
   <image l:href="#IMG0001"/>
   <section>
    <title><p>Part A</p></title>
    <p>Nested text.</p>
   </section>
  </section>
  <section>
   <p>Untitled body.</p>
  </section>
 </body>
 <body name="notes" type="notes">
  <section id="note7"><p>See also.</p></section>
 </body>
 <binary id="cover.jpg" content-type="image/jpeg">aGVsbG8=</binary>
 <binary id="img0001" content-type="image/png">
  iVBORw0K
  Ggo=
 </binary>
</FictionBook>
"""
)


@pytest.fixture
def sample_fb2() -> bytes:
    """A small but complete FB2 book."""
    return SAMPLE_FB2.encode("utf-8")


@pytest.fixture
def make_fb2() -> Callable[..., bytes]:
    """Build an FB2 document from raw description, body, and binary XML."""

    def _make(
        *bodies: str,
        description: str = "",
        binaries: str = "",
    ) -> bytes:
        body_xml = "".join(
            body if body.lstrip().startswith("<body") else f"<body>{body}</body>"
            for body in bodies
        )
        document = f"{FB2_HEADER}<description>{description}</description>{body_xml}{binaries}</FictionBook>"
        return document.encode("utf-8")

    return _make


@pytest.fixture
def vault(tmp_path: Path) -> VaultStorage:
    """An empty vault rooted in a temporary directory."""
    return VaultStorage(tmp_path)

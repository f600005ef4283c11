"""Tests for the image registry and materializer."""

from __future__ import annotations

from pathlib import Path

import pytest

from conftest import PNG_BYTES, PNG_PAYLOAD
from fb2md.exceptions import ImageDecodeError
from fb2md.images import (
    build_image_registry,
    decode_image,
    find_image,
    image_extension,
    materialize_image,
    safe_image_name,
)
from fb2md.schemas import ImageRecord
from fb2md.storage import VaultStorage
from fb2md.xml_utils import load_document


class TestBuildImageRegistry:
    """Tests for build_image_registry function."""

    def test_keys_are_lower_cased(self, make_fb2) -> None:
        """Identifiers are normalized for case-insensitive lookup."""
        binaries = f'<binary id="Pic_1.PNG" content-type="image/png">{PNG_PAYLOAD}</binary>'
        registry = build_image_registry(load_document(make_fb2("<section/>", binaries=binaries)))

        assert list(registry) == ["pic_1.png"]
        assert registry["pic_1.png"].content_type == "image/png"
        assert registry["pic_1.png"].data == PNG_PAYLOAD

    def test_missing_content_type_defaults_to_jpeg(self, make_fb2) -> None:
        """A binary without content-type is treated as JPEG."""
        binaries = '<binary id="a">aGVsbG8=</binary>'
        registry = build_image_registry(load_document(make_fb2("<section/>", binaries=binaries)))

        assert registry["a"].content_type == "image/jpeg"

    def test_blank_payload_is_kept(self, make_fb2) -> None:
        """Empty binaries are registered and flagged as blank."""
        binaries = '<binary id="empty" content-type="image/png">  \n </binary>'
        registry = build_image_registry(load_document(make_fb2("<section/>", binaries=binaries)))

        assert registry["empty"].is_blank


class TestFindImage:
    """Tests for find_image function."""

    @pytest.fixture
    def registry(self) -> dict[str, ImageRecord]:
        return {"img0001": ImageRecord(identifier="img0001", data=PNG_PAYLOAD)}

    @pytest.mark.parametrize("reference", ["img0001", "#IMG0001", "#img0001", "img0001.jpg", "#Img0001.JPG"])
    def test_case_and_suffix_tolerant(self, registry: dict[str, ImageRecord], reference: str) -> None:
        """Lookup ignores case, a leading #, and a trailing extension."""
        assert find_image(registry, reference) is registry["img0001"]

    def test_exact_key_with_dot_wins(self) -> None:
        """An id that really contains a dot is found directly."""
        registry = {
            "cover": ImageRecord(identifier="cover"),
            "cover.jpg": ImageRecord(identifier="cover.jpg"),
        }

        assert find_image(registry, "#cover.jpg").identifier == "cover.jpg"

    @pytest.mark.parametrize("reference", [None, "", "#", "#missing", "other.png"])
    def test_unresolved_reference_returns_none(
        self, registry: dict[str, ImageRecord], reference: str | None
    ) -> None:
        """Unknown or empty references resolve to nothing."""
        assert find_image(registry, reference) is None


class TestImageNaming:
    """Tests for extension and file name helpers."""

    @pytest.mark.parametrize(
        ("content_type", "expected"),
        [("image/png", "png"), ("image/jpeg", "jpeg"), ("image/GIF", "gif"), ("image", "jpg"), ("image/", "jpg")],
    )
    def test_image_extension(self, content_type: str, expected: str) -> None:
        """Extension comes from the mime subtype, defaulting to jpg."""
        assert image_extension(content_type) == expected

    @pytest.mark.parametrize(
        ("identifier", "expected"),
        [("cover.jpg", "cover_jpg"), ("img-01_a", "img-01_a"), ("рис 1", "____1"), ("", "image")],
    )
    def test_safe_image_name(self, identifier: str, expected: str) -> None:
        """Characters outside letters, digits, - and _ are replaced."""
        assert safe_image_name(identifier) == expected


class TestDecodeImage:
    """Tests for decode_image function."""

    def test_ignores_line_breaks(self) -> None:
        """Wrapped payloads decode to the original bytes."""
        record = ImageRecord(identifier="x", data="\n  iVBORw0K\n  Ggo=\n")

        assert decode_image(record) == PNG_BYTES

    def test_invalid_payload_raises(self) -> None:
        """Broken padding is reported as ImageDecodeError."""
        record = ImageRecord(identifier="broken", data="abc")

        with pytest.raises(ImageDecodeError, match="broken"):
            decode_image(record)


class TestMaterializeImage:
    """Tests for materialize_image function."""

    @pytest.mark.asyncio
    async def test_writes_decoded_bytes(self, vault: VaultStorage, tmp_path: Path) -> None:
        """Image is written under image_root/book_name with its extension."""
        record = ImageRecord(identifier="img0001", content_type="image/png", data=PNG_PAYLOAD)

        path = await materialize_image(vault, image_root="fb2-images", book_name="Book", record=record)

        assert path == "fb2-images/Book/img0001.png"
        assert (tmp_path / "fb2-images" / "Book" / "img0001.png").read_bytes() == PNG_BYTES

    @pytest.mark.asyncio
    async def test_never_overwrites(self, vault: VaultStorage, tmp_path: Path) -> None:
        """Same id and book twice yields two distinct readable files."""
        first = ImageRecord(identifier="pic", content_type="image/png", data=PNG_PAYLOAD)
        second = ImageRecord(identifier="pic", content_type="image/png", data="aGVsbG8=")

        path_one = await materialize_image(vault, image_root="imgs", book_name="Book", record=first)
        path_two = await materialize_image(vault, image_root="imgs", book_name="Book", record=second)

        assert path_one == "imgs/Book/pic.png"
        assert path_two == "imgs/Book/pic_1.png"
        assert (tmp_path / path_one).read_bytes() == PNG_BYTES
        assert (tmp_path / path_two).read_bytes() == b"hello"

    @pytest.mark.asyncio
    async def test_counter_keeps_incrementing(self, vault: VaultStorage, tmp_path: Path) -> None:
        """Existing suffixed files are skipped too."""
        folder = tmp_path / "imgs" / "Book"
        folder.mkdir(parents=True)
        (folder / "pic.png").write_bytes(b"old")
        (folder / "pic_1.png").write_bytes(b"old")
        record = ImageRecord(identifier="pic", content_type="image/png", data=PNG_PAYLOAD)

        path = await materialize_image(vault, image_root="imgs", book_name="Book", record=record)

        assert path == "imgs/Book/pic_2.png"
        assert (folder / "pic.png").read_bytes() == b"old"

    @pytest.mark.asyncio
    async def test_invalid_payload_writes_nothing(self, vault: VaultStorage, tmp_path: Path) -> None:
        """Decoding happens before the folder or file is created."""
        record = ImageRecord(identifier="bad", data="abc")

        with pytest.raises(ImageDecodeError):
            await materialize_image(vault, image_root="imgs", book_name="Book", record=record)

        assert not (tmp_path / "imgs").exists()

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest
from PIL import Image

from pdf_stitcher.compositor import compose, encode_image, layout_offsets, png_compress_level
from pdf_stitcher.exceptions import OutputWriteError, PDFStitcherException
from pdf_stitcher.types import NormalizedImage, OutputFormat

RED = (255, 0, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)


def _solid(page_index: int, size: tuple[int, int], color: tuple[int, int, int]) -> NormalizedImage:
    return NormalizedImage(page_index=page_index, image=Image.new("RGB", size, color))


def test_layout_offsets_are_cumulative() -> None:
    assert layout_offsets([10, 20, 30]) == ([0, 10, 30], 60)
    assert layout_offsets([7]) == ([0], 7)
    assert layout_offsets([]) == ([], 0)


def test_compose_stacks_pages_without_gaps() -> None:
    canvas = compose([_solid(1, (40, 10), RED), _solid(3, (40, 20), BLUE)], 40)

    assert canvas.size == (40, 30)
    assert canvas.mode == "RGB"
    assert canvas.getpixel((0, 0)) == RED
    assert canvas.getpixel((39, 9)) == RED
    assert canvas.getpixel((0, 10)) == BLUE
    assert canvas.getpixel((39, 29)) == BLUE


def test_compose_fills_uncovered_area_white() -> None:
    canvas = compose([_solid(1, (5, 10), RED)], 10)
    assert canvas.getpixel((4, 5)) == RED
    assert canvas.getpixel((9, 5)) == WHITE


def test_compose_requires_images() -> None:
    with pytest.raises(PDFStitcherException):
        compose([], 10)


@pytest.mark.parametrize(
    ("quality", "level"),
    [(100, 0), (95, 1), (90, 1), (50, 5), (10, 9), (1, 9)],
)
def test_png_compress_level(quality: int, level: int) -> None:
    assert png_compress_level(quality) == level


@pytest.mark.parametrize(
    ("output_format", "pil_format"),
    [(OutputFormat.JPG, "JPEG"), (OutputFormat.PNG, "PNG"), (OutputFormat.WEBP, "WEBP")],
)
def test_encode_image_formats(tmp_path: Path, output_format: OutputFormat, pil_format: str) -> None:
    destination = tmp_path / f"out.{output_format.extension}"
    canvas = Image.new("RGB", (30, 60), RED)

    assert encode_image(canvas, destination, output_format, 80) == destination
    with Image.open(destination) as img:
        assert img.format == pil_format
        assert img.size == (30, 60)
    assert [path.name for path in tmp_path.iterdir()] == [destination.name]


def test_encode_image_overwrites_existing_file(tmp_path: Path) -> None:
    destination = tmp_path / "out.png"
    destination.write_text("stale")

    encode_image(Image.new("RGB", (4, 4), BLUE), destination, OutputFormat.PNG, 90)

    with Image.open(destination) as img:
        assert img.getpixel((0, 0)) == BLUE


def test_encode_image_creates_parent_directories(tmp_path: Path) -> None:
    destination = tmp_path / "a" / "b" / "out.jpg"
    encode_image(Image.new("RGB", (4, 4), RED), destination, OutputFormat.JPG, 1)
    assert destination.exists()


def test_encode_image_failure_leaves_no_partial_file(tmp_path: Path) -> None:
    destination = tmp_path / "taken"
    destination.mkdir()

    with pytest.raises(OutputWriteError):
        encode_image(Image.new("RGB", (4, 4), RED), destination, OutputFormat.JPG, 90)

    assert [path.name for path in tmp_path.iterdir()] == ["taken"]


@pytest.fixture()
def umask_022():
    previous = os.umask(0o022)
    try:
        yield
    finally:
        os.umask(previous)


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_new_output_honours_umask(tmp_path: Path, umask_022: None) -> None:
    destination = tmp_path / "out.jpg"
    encode_image(Image.new("RGB", (4, 4), RED), destination, OutputFormat.JPG, 90)
    assert stat.S_IMODE(destination.stat().st_mode) == 0o644


@pytest.mark.skipif(os.name == "nt", reason="POSIX permissions")
def test_overwritten_output_keeps_its_mode(tmp_path: Path, umask_022: None) -> None:
    destination = tmp_path / "out.png"
    destination.write_text("stale")
    destination.chmod(0o640)

    encode_image(Image.new("RGB", (4, 4), BLUE), destination, OutputFormat.PNG, 90)

    assert stat.S_IMODE(destination.stat().st_mode) == 0o640

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable, Optional
import sys

import pytest
from PIL import Image
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_stitcher.exceptions import RasterizerUnavailableError  # noqa: E402
from pdf_stitcher.types import DocumentProfile, RasterizeOutcome  # noqa: E402

PAGE_COLORS = [
    (200, 30, 30),
    (30, 200, 30),
    (30, 30, 200),
    (200, 200, 30),
    (30, 200, 200),
    (200, 30, 200),
]


def page_color(page_index: int) -> tuple[int, int, int]:
    return PAGE_COLORS[(page_index - 1) % len(PAGE_COLORS)]


class FakeRasterizer:
    """Writes one solid-colour PNG per page; failures are scripted per page."""

    def __init__(
        self,
        *,
        size: tuple[int, int] = (100, 50),
        failing: Iterable[int] = (),
        timing_out: Iterable[int] = (),
        corrupt: Iterable[int] = (),
        unavailable: bool = False,
    ) -> None:
        self.size = size
        self.failing = set(failing)
        self.timing_out = set(timing_out)
        self.corrupt = set(corrupt)
        self.unavailable = unavailable
        self.calls: list[tuple[int, int, Path, float]] = []

    def rasterize(
        self,
        pdf_path: Path,
        page_index: int,
        dpi: int,
        output_prefix: Path,
        timeout: float,
    ) -> RasterizeOutcome:
        self.calls.append((page_index, dpi, output_prefix, timeout))
        if self.unavailable:
            raise RasterizerUnavailableError()
        if page_index in self.timing_out:
            return RasterizeOutcome(page_index=page_index, ok=False, reason="timeout", message="timed out")
        if page_index in self.failing:
            return RasterizeOutcome(page_index=page_index, ok=False, reason="exit-code", message="exit code 1")

        output_file = output_prefix.with_name(output_prefix.name + ".png")
        if page_index in self.corrupt:
            output_file.write_bytes(b"not a png")
        else:
            Image.new("RGB", self.size, page_color(page_index)).save(output_file, format="PNG")
        return RasterizeOutcome(page_index=page_index, ok=True, path=output_file)


class StaticInspector:
    name = "static"

    def __init__(self, page_count: Optional[int], width_pt: Optional[float] = None) -> None:
        self.page_count = page_count
        self.width_pt = width_pt

    def inspect(self, pdf_path: Path) -> Optional[DocumentProfile]:
        if self.page_count is None and self.width_pt is None:
            return None
        return DocumentProfile(
            page_count=self.page_count,
            reference_page_width_pt=self.width_pt,
            source=self.name,
        )


@pytest.fixture()
def sample_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "sample.pdf"
    writer = PdfWriter()
    for _ in range(5):
        writer.add_blank_page(width=200, height=300)
    writer.add_metadata({"/Producer": "pdf-stitcher-tests", "/Title": "Sample"})
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def image_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(
        filename: str,
        size: tuple[int, int],
        color: tuple[int, ...] = (255, 0, 0),
        mode: str = "RGB",
    ) -> Path:
        path = tmp_path / filename
        Image.new(mode, size, color).save(path, format="PNG")
        return path

    return _create

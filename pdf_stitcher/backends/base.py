"""Backend protocols for document inspection and page rasterization."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Protocol

from ..types import DocumentProfile, RasterizeOutcome


class DocumentInspector(Protocol):
    """Reads page count and reference page size from a document."""

    name: str

    def inspect(self, pdf_path: Path) -> Optional[DocumentProfile]:
        """Return a profile, or ``None`` when the inspector is unavailable."""


class PageRasterizer(Protocol):
    """Renders exactly one page of a document into an image file."""

    def rasterize(
        self,
        pdf_path: Path,
        page_index: int,
        dpi: int,
        output_prefix: Path,
        timeout: float,
    ) -> RasterizeOutcome:
        """
        Render page ``page_index`` (1-based) to ``<output_prefix>.png``.

        Per-page problems are reported through the returned outcome.
        Raises :class:`~pdf_stitcher.exceptions.RasterizerUnavailableError`
        when the rendering tool itself is missing.
        """

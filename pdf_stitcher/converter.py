"""PDF to stitched image conversion built from the pipeline stages."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .backends import PdfinfoInspector, PdftoppmRasterizer, PypdfInspector
from .backends.base import DocumentInspector, PageRasterizer
from .compositor import compose, encode_image
from .config import StitchSettings
from .exceptions import NoPagesDecodedError, NoPagesRenderedError
from .inspection import inspect_document
from .normalizer import normalize_artifacts
from .planner import plan_density
from .sequencer import PageSequencer, ProgressCallback
from .types import ConversionRequest, ConversionResult, PageFailure
from .utils import time_block
from .workspace import Workspace

LOGGER = logging.getLogger(__name__)


class PDFStitcher:
    """Rasterize every page of a PDF and stack the pages into one image."""

    def __init__(
        self,
        settings: Optional[StitchSettings] = None,
        *,
        inspectors: Optional[Sequence[DocumentInspector]] = None,
        rasterizer: Optional[PageRasterizer] = None,
    ) -> None:
        self.settings = settings or StitchSettings()
        if inspectors is None:
            inspectors = [PdfinfoInspector(timeout=self.settings.inspect_timeout), PypdfInspector()]
        self.inspectors: List[DocumentInspector] = list(inspectors)
        self.rasterizer: PageRasterizer = rasterizer or PdftoppmRasterizer()

    def plan(self, request: ConversionRequest) -> tuple[int, int]:
        """Return ``(page_count, dpi)`` for ``request``."""

        profile = inspect_document(
            request.document_path,
            self.inspectors,
            default_page_count=self.settings.default_page_count,
        )
        dpi = plan_density(
            request.target_width,
            profile.reference_page_width_pt,
            max_dpi=self.settings.max_dpi,
            default_page_width_pt=self.settings.default_page_width_pt,
            large_page_threshold_pt=self.settings.large_page_threshold_pt,
        )
        LOGGER.info("Using DPI %d for %d pages", dpi, profile.page_count)
        return profile.page_count or self.settings.default_page_count, dpi

    def convert(
        self,
        request: ConversionRequest,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> ConversionResult:
        LOGGER.info("Starting conversion: %s -> %s", request.document_path, request.output_path)
        page_count, dpi = self.plan(request)
        sequencer = PageSequencer(self.rasterizer, timeout=self.settings.page_timeout)

        with Workspace(self.settings.temp_dir) as workspace:
            with time_block(LOGGER, "Page rasterization"):
                sequence = sequencer.run(
                    request.document_path,
                    page_count,
                    dpi,
                    workspace.path,
                    progress_callback=progress_callback,
                )

            if not sequence.artifacts:
                raise NoPagesRenderedError()
            LOGGER.info("Rendered %d of %d pages", len(sequence.artifacts), page_count)

            failures: List[PageFailure] = list(sequence.failures)
            images = normalize_artifacts(sequence.artifacts, request.target_width, failures)
            if not images:
                raise NoPagesDecodedError()

            with time_block(LOGGER, "Composition"):
                canvas = compose(images, request.target_width)
                try:
                    encode_image(canvas, request.output_path, request.format, request.quality)
                finally:
                    width, height = canvas.size
                    canvas.close()

        return ConversionResult(
            output_path=request.output_path,
            format=request.format,
            dpi=dpi,
            page_count=page_count,
            rendered_pages=[artifact.page_index for artifact in sequence.artifacts],
            composed_pages=[image.page_index for image in images],
            failures=sorted(failures, key=lambda failure: failure.page_index),
            width=width,
            height=height,
            file_size=request.output_path.stat().st_size,
        )


def convert_pdf_to_image(
    request: ConversionRequest,
    *,
    settings: Optional[StitchSettings] = None,
    inspectors: Optional[Sequence[DocumentInspector]] = None,
    rasterizer: Optional[PageRasterizer] = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> ConversionResult:
    """Convert ``request.document_path`` into a single stitched image."""

    stitcher = PDFStitcher(settings, inspectors=inspectors, rasterizer=rasterizer)
    return stitcher.convert(request, progress_callback=progress_callback)


__all__ = ["PDFStitcher", "convert_pdf_to_image"]

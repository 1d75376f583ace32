"""Sequential per-page rasterization."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from .backends.base import PageRasterizer
from .types import PageArtifact, RasterizeOutcome, SequenceResult

LOGGER = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, RasterizeOutcome], None]


def page_prefix(workspace_dir: Path, page_index: int) -> Path:
    """Deterministic output prefix for ``page_index`` inside the workspace."""
    return workspace_dir / f"page-{page_index:04d}"


class PageSequencer:
    """Drive a :class:`PageRasterizer` over every page, one at a time.

    Pages are rendered strictly in order, one external process each, so
    that only a single page bitmap is in flight. A page that times out or
    fails is recorded and skipped; there are no retries.
    """

    def __init__(self, rasterizer: PageRasterizer, *, timeout: float = 60.0) -> None:
        self.rasterizer = rasterizer
        self.timeout = timeout

    def run(
        self,
        pdf_path: Path,
        page_count: int,
        dpi: int,
        workspace_dir: Path,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> SequenceResult:
        result = SequenceResult(page_count=page_count)

        for page_index in range(1, page_count + 1):
            # RasterizerUnavailableError propagates: a missing tool fails every page.
            outcome = self.rasterizer.rasterize(
                pdf_path,
                page_index,
                dpi,
                page_prefix(workspace_dir, page_index),
                self.timeout,
            )

            if outcome.ok and outcome.path is not None:
                result.artifacts.append(PageArtifact(page_index=page_index, path=outcome.path))
                LOGGER.debug("Page %d/%d rendered to %s", page_index, page_count, outcome.path)
            else:
                failure = outcome.to_failure()
                result.failures.append(failure)
                LOGGER.warning("Skipping page %d/%d: %s", page_index, page_count, failure.message or failure.reason)

            if progress_callback:
                progress_callback(page_index, page_count, outcome)

        return result

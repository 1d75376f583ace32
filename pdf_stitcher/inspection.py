"""Document inspection with graceful fallback to defaults."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from .backends.base import DocumentInspector
from .types import DocumentProfile

LOGGER = logging.getLogger(__name__)


def inspect_document(
    pdf_path: Path,
    inspectors: Iterable[DocumentInspector],
    *,
    default_page_count: int = 3,
) -> DocumentProfile:
    """Ask each inspector in turn and merge what they report.

    The first inspector to report a field wins for that field. A missing
    page count falls back to ``default_page_count``; a missing page width
    stays ``None``. Inspection never fails the run.
    """

    page_count: Optional[int] = None
    width_pt: Optional[float] = None
    sources: list[str] = []

    for inspector in inspectors:
        profile = inspector.inspect(pdf_path)
        if profile is None:
            continue
        answered = False
        if page_count is None and profile.page_count:
            page_count = profile.page_count
            answered = True
        if width_pt is None and profile.reference_page_width_pt:
            width_pt = profile.reference_page_width_pt
            answered = True
        if answered:
            sources.append(profile.source)
        if page_count is not None and width_pt is not None:
            break

    if page_count is None:
        LOGGER.warning(
            "Could not determine page count of %s, assuming %d pages", pdf_path, default_page_count
        )
        page_count = default_page_count
    else:
        LOGGER.info("PDF has %d pages", page_count)

    return DocumentProfile(
        page_count=page_count,
        reference_page_width_pt=width_pt,
        source="+".join(sources) or "default",
    )

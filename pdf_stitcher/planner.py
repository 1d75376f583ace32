"""Rasterization density planning."""

from __future__ import annotations

import logging
from typing import Optional

from .utils import round_half_up

LOGGER = logging.getLogger(__name__)

POINTS_PER_INCH = 72


def plan_density(
    target_width: int,
    reference_page_width_pt: Optional[float] = None,
    *,
    max_dpi: int = 200,
    default_page_width_pt: float = 595.0,
    large_page_threshold_pt: float = 800.0,
) -> int:
    """
    Return the DPI at which pages should be rasterized.

    The baseline assumes an A4-wide page (595pt). Pages wider than
    ``large_page_threshold_pt`` are planned from their real width so that
    large formats are not rendered at needlessly high resolution. The
    result is capped at ``max_dpi``.
    """

    dpi = round_half_up(target_width / default_page_width_pt * POINTS_PER_INCH)

    if reference_page_width_pt is not None and reference_page_width_pt > large_page_threshold_pt:
        dpi = round_half_up(target_width / reference_page_width_pt * POINTS_PER_INCH)
        LOGGER.info(
            "Large page detected (%.0fpt), adjusting DPI to %d", reference_page_width_pt, dpi
        )

    return max(1, min(dpi, max_dpi))

"""Tunable settings and CLI defaults for PDF Stitcher."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_WIDTH = 1200
DEFAULT_QUALITY = 90
DEFAULT_FORMAT = "jpg"


@dataclass(frozen=True)
class StitchSettings:
    """
    Knobs of the conversion pipeline.

    Attributes:
        page_timeout: Seconds allowed for rasterizing a single page
        max_dpi: Ceiling applied to the planned rasterization density
        default_page_count: Page count assumed when the document cannot be inspected
        default_page_width_pt: Page width (points) assumed for density planning (A4)
        large_page_threshold_pt: Pages wider than this are planned from their real width
        inspect_timeout: Seconds allowed for the document inspector
        temp_dir: Parent directory for the run workspace (system temp when None)
    """

    page_timeout: float = 60.0
    max_dpi: int = 200
    default_page_count: int = 3
    default_page_width_pt: float = 595.0
    large_page_threshold_pt: float = 800.0
    inspect_timeout: float = 30.0
    temp_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.page_timeout <= 0:
            raise ValueError("page_timeout must be positive")
        if self.max_dpi <= 0:
            raise ValueError("max_dpi must be a positive integer")
        if self.default_page_count <= 0:
            raise ValueError("default_page_count must be a positive integer")

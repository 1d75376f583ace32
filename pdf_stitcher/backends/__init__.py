"""Backend abstractions for PDF Stitcher."""

from .base import DocumentInspector, PageRasterizer
from .poppler_backend import PdfinfoInspector, PdftoppmRasterizer, parse_pdfinfo_output
from .pypdf_backend import PypdfInspector

__all__ = [
    "DocumentInspector",
    "PageRasterizer",
    "PdfinfoInspector",
    "PdftoppmRasterizer",
    "PypdfInspector",
    "parse_pdfinfo_output",
]

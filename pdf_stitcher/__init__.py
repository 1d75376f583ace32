"""
PDF Stitcher - Convert a multi-page PDF into one stitched image.

Every page is rasterized at an adaptively chosen resolution, scaled to a
common width and stacked top to bottom into a single JPEG, PNG or WebP.

Quick Start:
    >>> from pdf_stitcher import ConversionRequest, convert_pdf_to_image
    >>> request = ConversionRequest.from_options('input.pdf', width=1200)
    >>> result = convert_pdf_to_image(request)

Main Classes:
    - PDFStitcher: Runs the conversion pipeline
    - Workspace: Scoped temporary directory for page images

Data Classes:
    - ConversionRequest: Validated conversion parameters
    - ConversionResult: Outcome of a conversion
    - StitchSettings: Pipeline tuning (timeouts, DPI ceiling)

Exceptions:
    - PDFStitcherException: Base exception
    - InvalidRequestError: Invalid width, quality or format
    - InputNotFoundError: Input PDF missing
    - RasterizerUnavailableError: pdftoppm not installed
    - NoPagesRenderedError: No page could be rasterized
    - NoPagesDecodedError: No rasterized page could be decoded
    - OutputWriteError: Output image could not be written

For CLI usage, use the 'pdf2img' command after installation.
"""

__version__ = "1.0.0"

# Core classes
from pdf_stitcher.converter import PDFStitcher, convert_pdf_to_image
from pdf_stitcher.workspace import Workspace

# Data types
from pdf_stitcher.config import StitchSettings
from pdf_stitcher.types import ConversionRequest, ConversionResult, OutputFormat

# Exceptions
from pdf_stitcher.exceptions import (
    PDFStitcherException,
    InvalidRequestError,
    InputNotFoundError,
    RasterizerUnavailableError,
    NoPagesRenderedError,
    NoPagesDecodedError,
    OutputWriteError,
)

# Pipeline stages
from pdf_stitcher.planner import plan_density

__author__ = "PDF Stitcher Contributors"
__license__ = "MIT"

__all__ = [
    # Main classes
    "PDFStitcher",
    "Workspace",
    "convert_pdf_to_image",
    # Data types
    "ConversionRequest",
    "ConversionResult",
    "OutputFormat",
    "StitchSettings",
    # Exceptions
    "PDFStitcherException",
    "InvalidRequestError",
    "InputNotFoundError",
    "RasterizerUnavailableError",
    "NoPagesRenderedError",
    "NoPagesDecodedError",
    "OutputWriteError",
    # Pipeline stages
    "plan_density",
    # Version info
    "__version__",
]

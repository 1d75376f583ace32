"""
Type definitions and dataclasses for PDF Stitcher.

This module defines data structures passed between the pipeline stages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image

from .exceptions import InputNotFoundError, InvalidRequestError
from .utils import default_output_path


class OutputFormat(str, Enum):
    """Supported output encodings."""

    JPG = "jpg"
    PNG = "png"
    WEBP = "webp"

    @classmethod
    def parse(cls, value: Union[str, "OutputFormat"]) -> "OutputFormat":
        if isinstance(value, OutputFormat):
            return value
        name = str(value).strip().lower()
        if name == "jpeg":
            name = "jpg"
        try:
            return cls(name)
        except ValueError:
            supported = ", ".join(["jpg", "jpeg", "png", "webp"])
            raise InvalidRequestError(
                f'Unsupported format "{value}". Supported formats: {supported}'
            ) from None

    @property
    def extension(self) -> str:
        return self.value


def _parse_int(value: Union[str, int], name: str) -> int:
    if isinstance(value, bool):
        raise InvalidRequestError(f"{name} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidRequestError(f"{name} must be an integer, got {value!r}") from None


@dataclass(frozen=True)
class ConversionRequest:
    """
    A validated, immutable description of one conversion.

    Attributes:
        document_path: Source PDF
        output_path: Destination image (overwritten if present)
        target_width: Width of the stitched image in pixels
        quality: Encoder quality, 1-100
        format: Output encoding
    """
    document_path: Path
    output_path: Path
    target_width: int
    quality: int
    format: OutputFormat

    def __post_init__(self) -> None:
        if isinstance(self.target_width, bool) or not isinstance(self.target_width, int) or self.target_width <= 0:
            raise InvalidRequestError("Width must be a positive integer")
        if isinstance(self.quality, bool) or not isinstance(self.quality, int) or not 1 <= self.quality <= 100:
            raise InvalidRequestError("Quality must be between 1 and 100")
        if not isinstance(self.format, OutputFormat):
            raise InvalidRequestError(f"Unsupported format: {self.format!r}")

    @classmethod
    def from_options(
        cls,
        input_path: Union[str, Path],
        *,
        output: Optional[Union[str, Path]] = None,
        width: Union[str, int] = 1200,
        quality: Union[str, int] = 90,
        format: Union[str, OutputFormat] = "jpg",
    ) -> "ConversionRequest":
        """Build a request from raw command-line values."""

        document = Path(input_path)
        if not document.is_file():
            raise InputNotFoundError(f"PDF file does not exist: {input_path}")

        output_format = OutputFormat.parse(format)
        output_path = Path(output) if output else default_output_path(document, output_format.extension)

        return cls(
            document_path=document,
            output_path=output_path,
            target_width=_parse_int(width, "Width"),
            quality=_parse_int(quality, "Quality"),
            format=output_format,
        )


@dataclass
class DocumentProfile:
    """
    What the document inspector learned about the source PDF.

    Inspectors may leave ``page_count`` unset when their output lacks it;
    :func:`~pdf_stitcher.inspection.inspect_document` always returns a
    profile with a positive page count.

    Attributes:
        page_count: Number of pages to rasterize
        reference_page_width_pt: Width of the first page in points, if known
        source: Name of the inspector that answered, or "default"
    """
    page_count: Optional[int] = None
    reference_page_width_pt: Optional[float] = None
    source: str = "default"


@dataclass(frozen=True)
class PageArtifact:
    """One successfully rasterized page image inside the workspace."""
    page_index: int
    path: Path


@dataclass(frozen=True)
class PageFailure:
    """A page that was dropped from the output, with the reason why."""
    page_index: int
    reason: str
    message: str = ""


@dataclass(frozen=True)
class RasterizeOutcome:
    """Result of a single rasterizer invocation."""
    page_index: int
    ok: bool
    path: Optional[Path] = None
    reason: Optional[str] = None
    message: str = ""

    def to_failure(self) -> PageFailure:
        return PageFailure(page_index=self.page_index, reason=self.reason or "error", message=self.message)


@dataclass
class SequenceResult:
    """Ordered artifacts and failures produced by the page sequencer."""
    page_count: int
    artifacts: List[PageArtifact] = field(default_factory=list)
    failures: List[PageFailure] = field(default_factory=list)


@dataclass
class NormalizedImage:
    """A decoded page image scaled to the canvas width."""
    page_index: int
    image: Image.Image
    resampled: bool = False

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height


@dataclass
class ConversionResult:
    """
    Result of a completed conversion.

    Attributes:
        output_path: Written image
        format: Encoding used
        dpi: Rasterization density used for every page
        page_count: Pages the document was assumed to have
        rendered_pages: Pages rasterized successfully
        composed_pages: Pages present in the output, in order
        failures: Pages dropped along the way
        width: Output width in pixels
        height: Output height in pixels
        file_size: Output size in bytes
    """
    output_path: Path
    format: OutputFormat
    dpi: int
    page_count: int
    rendered_pages: List[int]
    composed_pages: List[int]
    failures: List[PageFailure]
    width: int
    height: int
    file_size: int

    @property
    def skipped_pages(self) -> List[int]:
        return [failure.page_index for failure in self.failures]

    def __str__(self) -> str:
        return (
            f"ConversionResult(output='{self.output_path}', pages={len(self.composed_pages)}/"
            f"{self.page_count}, size={self.width}x{self.height})"
        )

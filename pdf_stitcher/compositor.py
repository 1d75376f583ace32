"""Vertical composition of normalized pages and final encoding."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

from PIL import Image

from .exceptions import OutputWriteError, PDFStitcherException
from .types import NormalizedImage, OutputFormat
from .utils import round_half_up

LOGGER = logging.getLogger(__name__)

BACKGROUND = (255, 255, 255)

_PIL_FORMATS = {
    OutputFormat.JPG: "JPEG",
    OutputFormat.PNG: "PNG",
    OutputFormat.WEBP: "WEBP",
}


def layout_offsets(heights: Sequence[int]) -> Tuple[List[int], int]:
    """Return the top offset of every image and the total canvas height."""

    offsets: List[int] = []
    current_top = 0
    for height in heights:
        offsets.append(current_top)
        current_top += height
    return offsets, current_top


def compose(images: Sequence[NormalizedImage], width: int) -> Image.Image:
    """Stack ``images`` top to bottom on a white canvas ``width`` pixels wide."""

    if not images:
        raise PDFStitcherException("Nothing to compose.")

    offsets, total_height = layout_offsets([item.height for item in images])
    canvas = Image.new("RGB", (width, total_height), BACKGROUND)
    for item, top in zip(images, offsets):
        canvas.paste(item.image, (0, top))

    LOGGER.debug("Composed %d pages into %dx%d canvas", len(images), width, total_height)
    return canvas


def png_compress_level(quality: int) -> int:
    """Map a 1-100 quality to zlib level 0-9; higher quality means less effort."""
    return min(9, max(0, round_half_up((100 - quality) / 10)))


def save_options(output_format: OutputFormat, quality: int) -> Dict[str, Any]:
    if output_format is OutputFormat.PNG:
        return {"compress_level": png_compress_level(quality)}
    return {"quality": quality}


def output_file_mode(destination: Path) -> int:
    """Return the permission bits for the published image.

    An existing file keeps its mode; a new one gets 0666 less the process
    umask, as a plain ``open()`` would.
    """
    try:
        return stat.S_IMODE(destination.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def encode_image(canvas: Image.Image, output_path: Path, output_format: OutputFormat, quality: int) -> Path:
    """
    Encode ``canvas`` to ``output_path``, replacing any existing file.

    The image is written to a temporary file next to the destination and
    moved into place, so a failed encode never leaves a partial output.
    """
    destination = Path(output_path)
    temp_path: Path | None = None
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "wb", delete=False, dir=destination.parent, prefix=f".{destination.name}.", suffix=".tmp"
        ) as handle:
            temp_path = Path(handle.name)
            canvas.save(handle, format=_PIL_FORMATS[output_format], **save_options(output_format, quality))
        os.chmod(temp_path, output_file_mode(destination))
        os.replace(temp_path, destination)
    except (OSError, ValueError, KeyError) as exc:
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise OutputWriteError(f"Failed to write {destination}: {exc}") from exc

    LOGGER.info("Wrote %s (%s, quality %d)", destination, output_format.value, quality)
    return destination

"""Decode rasterized pages and scale them to a common width."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from PIL import Image

from .types import NormalizedImage, PageArtifact, PageFailure
from .utils import round_half_up

LOGGER = logging.getLogger(__name__)

_DECODE_ERRORS = (OSError, SyntaxError, ValueError, MemoryError, Image.DecompressionBombError)


def load_page_image(path: Path) -> Image.Image:
    """Decode ``path`` fully into an RGB image detached from the file.

    Transparent regions are flattened onto white.
    """

    with Image.open(path) as img:
        img.load()
        has_alpha = img.mode in ("RGBA", "LA") or (img.mode == "P" and "transparency" in img.info)
        if has_alpha:
            rgba = img.convert("RGBA")
            flattened = Image.new("RGB", rgba.size, (255, 255, 255))
            flattened.paste(rgba, mask=rgba.getchannel("A"))
            return flattened
        if img.mode != "RGB":
            return img.convert("RGB")
        return img.copy()


def scaled_height(width: int, height: int, target_width: int) -> int:
    return max(1, round_half_up(height * target_width / width))


def resample_to_width(image: Image.Image, target_width: int) -> Image.Image:
    """Resize ``image`` to ``target_width`` keeping its aspect ratio (Lanczos)."""
    height = scaled_height(image.width, image.height, target_width)
    return image.resize((target_width, height), Image.LANCZOS)


def normalize_artifacts(
    artifacts: Iterable[PageArtifact],
    target_width: int,
    failures: Optional[List[PageFailure]] = None,
) -> List[NormalizedImage]:
    """
    Decode every artifact and bring it to ``target_width``.

    Args:
        artifacts: Rasterized pages, in any order
        target_width: Width of the output canvas in pixels
        failures: Optional list that receives a ``decode`` failure per dropped page

    Returns:
        Normalized images in ascending page order. Pages that fail to
        decode or resize are logged and left out.
    """
    normalized: List[NormalizedImage] = []
    ordered = sorted(artifacts, key=lambda artifact: artifact.page_index)

    for position, artifact in enumerate(ordered, start=1):
        try:
            image = load_page_image(artifact.path)
            if image.width != target_width:
                item = NormalizedImage(
                    page_index=artifact.page_index,
                    image=resample_to_width(image, target_width),
                    resampled=True,
                )
            else:
                item = NormalizedImage(page_index=artifact.page_index, image=image)
        except _DECODE_ERRORS as exc:
            LOGGER.warning("Error processing page %d: %s", artifact.page_index, exc)
            if failures is not None:
                failures.append(PageFailure(page_index=artifact.page_index, reason="decode", message=str(exc)))
            continue

        LOGGER.debug(
            "Page %d (%d/%d): %dx%d",
            artifact.page_index,
            position,
            len(ordered),
            image.width,
            image.height,
        )

        normalized.append(item)

    return normalized

"""Utility helpers for PDF Stitcher."""

from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator


def configure_logging(verbose: bool = False) -> None:
    """Configure package-wide logging."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


@contextmanager
def time_block(logger: logging.Logger, message: str) -> Iterator[None]:
    """Context manager that logs the execution time of a code block."""
    start = datetime.now(tz=timezone.utc)
    logger.debug("Starting %s", message)
    try:
        yield
    finally:
        end = datetime.now(tz=timezone.utc)
        elapsed = (end - start).total_seconds()
        logger.info("%s completed in %.2fs", message, elapsed)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def default_output_path(pdf_path: Path, extension: str) -> Path:
    """Return ``<dir>/<stem>.<extension>`` next to the source document."""
    return pdf_path.parent / f"{pdf_path.stem}.{extension}"


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500 KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"

"""Poppler command-line backends (``pdfinfo`` and ``pdftoppm``)."""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import Optional, Tuple

from ..exceptions import RasterizerUnavailableError
from ..types import DocumentProfile, RasterizeOutcome

LOGGER = logging.getLogger(__name__)

_PAGES_RE = re.compile(r"Pages:\s+(\d+)")
_PAGE_SIZE_RE = re.compile(r"Page size:\s+([\d.]+)\s+x\s+([\d.]+)")

# Keep failure messages readable when a tool dumps a lot on stderr.
_STDERR_LIMIT = 4000


def parse_pdfinfo_output(text: str) -> Tuple[Optional[int], Optional[float]]:
    """Extract ``(page_count, page_width_pt)`` from ``pdfinfo`` output.

    Missing or malformed fields come back as ``None``.
    """

    page_count: Optional[int] = None
    width_pt: Optional[float] = None

    pages_match = _PAGES_RE.search(text or "")
    if pages_match:
        value = int(pages_match.group(1))
        page_count = value if value > 0 else None

    size_match = _PAGE_SIZE_RE.search(text or "")
    if size_match:
        try:
            value_pt = float(size_match.group(1))
        except ValueError:
            value_pt = 0.0
        width_pt = value_pt if value_pt > 0 else None

    return page_count, width_pt


class PdfinfoInspector:
    """Document inspector backed by Poppler's ``pdfinfo``."""

    name = "pdfinfo"

    def __init__(self, executable: str = "pdfinfo", *, timeout: float = 30.0) -> None:
        self.executable = executable
        self.timeout = timeout

    def inspect(self, pdf_path: Path) -> Optional[DocumentProfile]:
        try:
            completed = subprocess.run(
                [self.executable, str(pdf_path)],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError:
            LOGGER.debug("%s not available", self.executable)
            return None
        except subprocess.TimeoutExpired:
            LOGGER.warning("%s timed out after %.0fs", self.executable, self.timeout)
            return None
        except OSError as exc:
            LOGGER.warning("Unable to run %s: %s", self.executable, exc)
            return None

        if completed.returncode != 0:
            LOGGER.warning(
                "%s failed with exit code %s: %s",
                self.executable,
                completed.returncode,
                completed.stderr.strip()[-_STDERR_LIMIT:],
            )
            return None

        page_count, width_pt = parse_pdfinfo_output(completed.stdout)
        if page_count is None and width_pt is None:
            return None
        return DocumentProfile(page_count=page_count, reference_page_width_pt=width_pt, source=self.name)


class PdftoppmRasterizer:
    """Page rasterizer that runs one ``pdftoppm`` process per page."""

    name = "pdftoppm"

    def __init__(self, executable: str = "pdftoppm") -> None:
        self.executable = executable

    def build_command(self, pdf_path: Path, page_index: int, dpi: int, output_prefix: Path) -> list[str]:
        return [
            self.executable,
            "-png",
            "-r", str(dpi),
            "-f", str(page_index),
            "-l", str(page_index),
            "-singlefile",
            str(pdf_path),
            str(output_prefix),
        ]

    def rasterize(
        self,
        pdf_path: Path,
        page_index: int,
        dpi: int,
        output_prefix: Path,
        timeout: float,
    ) -> RasterizeOutcome:
        command = self.build_command(pdf_path, page_index, dpi, output_prefix)
        output_file = output_prefix.with_name(output_prefix.name + ".png")
        LOGGER.debug("Executing command: %s", " ".join(command))

        try:
            proc = subprocess.Popen(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
            )
        except FileNotFoundError as exc:
            raise RasterizerUnavailableError() from exc
        except PermissionError as exc:
            raise RasterizerUnavailableError(
                f"Cannot execute {self.executable}: {exc}"
            ) from exc

        try:
            _, stderr = proc.communicate(timeout=timeout)
        except subprocess.TimeoutExpired:
            proc.kill()
            proc.communicate()
            output_file.unlink(missing_ok=True)
            return RasterizeOutcome(
                page_index=page_index,
                ok=False,
                reason="timeout",
                message=f"Page {page_index} timed out after {timeout:.0f}s",
            )

        if proc.returncode != 0:
            detail = (stderr or "").strip()[-_STDERR_LIMIT:]
            message = f"Page {page_index} failed (exit code {proc.returncode})"
            if detail:
                message = f"{message}: {detail}"
            return RasterizeOutcome(page_index=page_index, ok=False, reason="exit-code", message=message)

        if not output_file.is_file():
            return RasterizeOutcome(
                page_index=page_index,
                ok=False,
                reason="missing-output",
                message=f"Page {page_index} produced no image file",
            )

        return RasterizeOutcome(page_index=page_index, ok=True, path=output_file)

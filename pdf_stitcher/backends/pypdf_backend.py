"""pypdf backend implementation for document inspection."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pypdf import PdfReader
from pypdf.errors import PyPdfError

from ..types import DocumentProfile

LOGGER = logging.getLogger(__name__)


class PypdfInspector:
    """Inspector that reads page count and first-page width with `pypdf`.

    Used when Poppler's ``pdfinfo`` is not installed.
    """

    name = "pypdf"

    def inspect(self, pdf_path: Path) -> Optional[DocumentProfile]:
        try:
            reader = PdfReader(str(pdf_path))
            if reader.is_encrypted:
                reader.decrypt("")
            page_count = len(reader.pages)
            width_pt = float(reader.pages[0].mediabox.width) if page_count else None
        except (PyPdfError, OSError) as exc:
            LOGGER.warning("pypdf could not inspect %s: %s", pdf_path, exc)
            return None
        except Exception as exc:
            # Malformed objects surface as AttributeError, KeyError and the like.
            LOGGER.warning("pypdf could not parse %s: %s: %s", pdf_path, type(exc).__name__, exc)
            return None

        return DocumentProfile(
            page_count=page_count or None,
            reference_page_width_pt=width_pt if width_pt and width_pt > 0 else None,
            source=self.name,
        )

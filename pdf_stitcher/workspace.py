"""Scoped temporary directory for intermediate page images."""

from __future__ import annotations

import logging
import shutil
import tempfile
from pathlib import Path
from types import TracebackType
from typing import Optional, Type, Union

from .exceptions import PDFStitcherException

LOGGER = logging.getLogger(__name__)


class Workspace:
    """Create a unique directory on enter and remove it on exit.

    Removal happens on every exit path. Failing to remove the directory is
    logged as a warning and never raised.
    """

    def __init__(self, parent: Optional[Union[str, Path]] = None, prefix: str = "pdf2img-") -> None:
        self.parent = Path(parent) if parent is not None else None
        self.prefix = prefix
        self._path: Optional[Path] = None

    @property
    def path(self) -> Path:
        if self._path is None:
            raise PDFStitcherException("Workspace is not active.")
        return self._path

    def __enter__(self) -> "Workspace":
        if self.parent is not None:
            self.parent.mkdir(parents=True, exist_ok=True)
        self._path = Path(tempfile.mkdtemp(prefix=self.prefix, dir=self.parent))
        LOGGER.debug("Created workspace %s", self._path)
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        path, self._path = self._path, None
        if path is None:
            return
        try:
            if path.exists():
                shutil.rmtree(path)
            LOGGER.debug("Removed workspace %s", path)
        except OSError as exc:
            LOGGER.warning("Failed to clean up temporary files in %s: %s", path, exc)

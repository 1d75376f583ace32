"""
Custom exceptions for PDF Stitcher.

Per-page problems (timeouts, failed renders, undecodable images) are not
exceptions; they are collected as :class:`~pdf_stitcher.types.PageFailure`
values. Everything defined here terminates a conversion run.
"""


class PDFStitcherException(Exception):
    """Base exception for all PDF Stitcher errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF stitcher error occurred."


class InvalidRequestError(PDFStitcherException):
    """Raised when width, quality or format are invalid."""

    @property
    def default_message(self) -> str:
        return "Invalid conversion request."


class InputNotFoundError(InvalidRequestError):
    """Raised when the input document does not exist."""

    @property
    def default_message(self) -> str:
        return "Input PDF file does not exist."


class RasterizerUnavailableError(PDFStitcherException):
    """Raised when the page rasterizer executable cannot be found."""

    @property
    def default_message(self) -> str:
        return (
            "pdftoppm command not found. Install Poppler first:\n"
            "  macOS: brew install poppler\n"
            "  Ubuntu: sudo apt-get install poppler-utils"
        )


class NoPagesRenderedError(PDFStitcherException):
    """Raised when not a single page could be rasterized."""

    @property
    def default_message(self) -> str:
        return "PDF conversion failed, no pages were produced."


class NoPagesDecodedError(PDFStitcherException):
    """Raised when every rasterized page failed to decode."""

    @property
    def default_message(self) -> str:
        return "All pages failed processing."


class OutputWriteError(PDFStitcherException):
    """Raised when the stitched image cannot be encoded or written."""

    @property
    def default_message(self) -> str:
        return "Failed to write the output image."

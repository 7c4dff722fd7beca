"""Base exceptions shared by the templating and rendering contexts."""

from pathlib import Path
from typing import Optional


class ExportError(Exception):
    """Base class for every failure raised while exporting a document to PDF."""


class TemporaryFileError(ExportError, OSError):
    """
    Raised when a temporary file for an export job cannot be created or written.

    Attributes:
        purpose: What the file was for (e.g., 'layout script', 'body html')
        path: Path of the file, if it was created before the failure
        original_error: The underlying OSError
    """

    def __init__(
        self,
        purpose: str,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.purpose = purpose
        self.path = path
        self.original_error = original_error

        parts = [f"Could not write temporary {purpose} file"]
        if path:
            parts.append(f"Path: {path}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))

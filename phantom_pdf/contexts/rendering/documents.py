"""
Document-side collaborators of the export pipeline.

The pipeline consumes any DocumentSource (content/header/footer HTML) and a
BodyWriter that persists the body HTML to the file the renderer opens.
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from typing_extensions import Protocol, runtime_checkable

from phantom_pdf.contexts.rendering.logger import _log_debug
from phantom_pdf.exceptions import TemporaryFileError

BODY_PREFIX = "report-body-"
BODY_SUFFIX = ".html"


@runtime_checkable
class DocumentSource(Protocol):
    """Anything that can hand over rendered body, header and footer HTML."""

    def content(self) -> str: ...

    def header(self) -> Optional[str]: ...

    def footer(self) -> Optional[str]: ...


@runtime_checkable
class BodyWriter(Protocol):
    """Persists body HTML and returns the file the renderer should open."""

    def persist(self, html: str) -> Path: ...


@dataclass(frozen=True)
class HtmlDocument:
    """In-memory document made of ready HTML strings."""

    body: str
    header_html: Optional[str] = None
    footer_html: Optional[str] = None

    @classmethod
    def from_files(
        cls, body_file: Path, header_file: Optional[Path] = None, footer_file: Optional[Path] = None
    ) -> "HtmlDocument":
        def read(path: Optional[Path]) -> Optional[str]:
            return Path(path).read_text(encoding="utf-8") if path else None

        return cls(body=read(body_file), header_html=read(header_file), footer_html=read(footer_file))

    def content(self) -> str:
        return self.body

    def header(self) -> Optional[str]:
        return self.header_html

    def footer(self) -> Optional[str]:
        return self.footer_html


@dataclass(frozen=True)
class RenderedDocument:
    """
    A document ready for the renderer.

    Attributes:
        body_path: Temporary body HTML file owned by the current export call
        header_fragment: Raw header HTML, if any
        footer_fragment: Raw footer HTML, if any
    """

    body_path: Path
    header_fragment: Optional[str] = None
    footer_fragment: Optional[str] = None


class TemporaryBodyWriter:
    """
    Writes body HTML to a uniquely named temporary file.

    Args:
        directory: Where to create files (default: system temp directory).
            Relative asset URLs in the body resolve against this directory.
    """

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory) if directory else None

    def persist(self, html: str) -> Path:
        """
        Raises:
            TemporaryFileError: If the file cannot be created or written
        """
        try:
            handle, name = tempfile.mkstemp(
                prefix=BODY_PREFIX, suffix=BODY_SUFFIX, dir=str(self.directory) if self.directory else None
            )
        except OSError as e:
            raise TemporaryFileError("body html", original_error=e) from e

        path = Path(name)
        try:
            with os.fdopen(handle, "w", encoding="utf-8") as f:
                f.write(html)
        except OSError as e:
            path.unlink(missing_ok=True)
            raise TemporaryFileError("body html", path=path, original_error=e) from e

        _log_debug(f"Body html written: {path} ({len(html)} chars)")
        return path

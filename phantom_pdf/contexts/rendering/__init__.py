"""
Rendering Context

Responsibilities:
- Validates renderer options and serializes them to command-line form
- Builds renderer command lines with platform-normalized input paths
- Runs the renderer under a timeout and reports its failures
- Owns temporary files of an export job and removes them on every outcome
- Orchestrates a full document-to-PDF export

Owns: renderer options, process execution, export configuration, job artifacts
Never: Produces body/header/footer HTML content
"""

from phantom_pdf.contexts.rendering.config import ExportConfig, load_export_config
from phantom_pdf.contexts.rendering.documents import HtmlDocument, TemporaryBodyWriter
from phantom_pdf.contexts.rendering.exceptions import (
    ExportError,
    InvalidOptionError,
    RendererNotFoundError,
    RenderProcessError,
    RenderTimeoutError,
    TemporaryFileError,
)
from phantom_pdf.contexts.rendering.exporter import ExportState, PdfExportPipeline
from phantom_pdf.contexts.rendering.locator import EnvironmentBinaryLocator, StaticBinaryLocator
from phantom_pdf.contexts.rendering.options import OPTION_SCHEMA, CommandOptionSet

__all__ = [
    # Orchestration
    "PdfExportPipeline",
    "ExportState",
    # Configuration
    "ExportConfig",
    "load_export_config",
    "CommandOptionSet",
    "OPTION_SCHEMA",
    # Collaborators
    "HtmlDocument",
    "TemporaryBodyWriter",
    "EnvironmentBinaryLocator",
    "StaticBinaryLocator",
    # Errors
    "ExportError",
    "InvalidOptionError",
    "RendererNotFoundError",
    "RenderProcessError",
    "RenderTimeoutError",
    "TemporaryFileError",
]

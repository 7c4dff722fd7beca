"""
PDF Export Pipeline

Orchestrates one export: persist the body HTML, generate the layout script,
build the render job and run the renderer. Every step is a single call into
the component that owns it; temporary files from earlier steps are released
before any error reaches the caller.

States, linear:
    CONFIGURED -> DOCUMENT_PREPARED -> SCRIPT_GENERATED -> COMMAND_BUILT
    -> PROCESS_RUN -> COMPLETED | FAILED
"""

import time
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Union

from phantom_pdf.contexts.rendering.artifacts import TemporaryArtifacts
from phantom_pdf.contexts.rendering.config import ExportConfig
from phantom_pdf.contexts.rendering.documents import (
    BodyWriter,
    DocumentSource,
    RenderedDocument,
    TemporaryBodyWriter,
)
from phantom_pdf.contexts.rendering.locator import BinaryLocator
from phantom_pdf.contexts.rendering.logger import (
    _log_debug,
    log_export_result,
    log_export_start,
    log_state_transition,
)
from phantom_pdf.contexts.rendering.process_runner import ProcessRunner, RenderJob
from phantom_pdf.contexts.templating.layout_script import generate_layout_script


class ExportState(Enum):
    CONFIGURED = "configured"
    DOCUMENT_PREPARED = "document_prepared"
    SCRIPT_GENERATED = "script_generated"
    COMMAND_BUILT = "command_built"
    PROCESS_RUN = "process_run"
    COMPLETED = "completed"
    FAILED = "failed"


class PdfExportPipeline:
    """
    Exports documents to PDF through the external renderer.

    The pipeline holds only injected collaborators; all per-export settings
    arrive as an ExportConfig on each call, so one pipeline can serve
    concurrent exports.

    Args:
        binary_locator: Resolves the renderer executable
        body_writer: Persists body HTML (default: TemporaryBodyWriter)
        runner: Spawns the renderer (default: ProcessRunner)
        script_generator: Writes the layout script (default: generate_layout_script)
        on_transition: Called with each ExportState as an export progresses

    Example:
        pipeline = PdfExportPipeline(EnvironmentBinaryLocator())
        pdf = pipeline.export(
            HtmlDocument(body=html, footer_html="Page @{{numPage}} of @{{totalPages}}"),
            Path("out/report.pdf"),
            load_export_config(overrides={"page": {"orientation": "landscape"}}),
        )
    """

    def __init__(
        self,
        binary_locator: BinaryLocator,
        body_writer: Optional[BodyWriter] = None,
        runner: Optional[ProcessRunner] = None,
        script_generator: Callable = generate_layout_script,
        on_transition: Optional[Callable[[ExportState], None]] = None,
    ):
        self.binary_locator = binary_locator
        self.body_writer = body_writer or TemporaryBodyWriter()
        self.runner = runner or ProcessRunner()
        self.script_generator = script_generator
        self.on_transition = on_transition

    def _enter(self, state: ExportState) -> None:
        log_state_transition(state)
        if self.on_transition is not None:
            self.on_transition(state)

    def export(
        self,
        document: DocumentSource,
        output_path: Union[str, Path],
        config: Optional[ExportConfig] = None,
    ) -> Path:
        """
        Export a document to a PDF file.

        Args:
            document: Source of body, header and footer HTML
            output_path: Where the PDF is written (its directory must exist)
            config: Settings for this export (default: ExportConfig())

        Returns:
            Absolute path of the written PDF

        Raises:
            ExportError: Any failure (temporary file, layout script, renderer
                process, timeout); temporary files are already removed
        """
        config = config or ExportConfig()
        output_path = Path(output_path).resolve()

        log_export_start(type(document).__name__, output_path, config.timeout)
        self._enter(ExportState.CONFIGURED)
        start_time = time.time()

        try:
            with TemporaryArtifacts() as artifacts:
                rendered = RenderedDocument(
                    body_path=artifacts.track(self.body_writer.persist(document.content())),
                    header_fragment=document.header(),
                    footer_fragment=document.footer(),
                )
                self._enter(ExportState.DOCUMENT_PREPARED)

                script_path = artifacts.track(self.script_generator(config.page, rendered))
                self._enter(ExportState.SCRIPT_GENERATED)

                job = RenderJob(
                    binary_path=self.binary_locator.locate(),
                    script_path=script_path,
                    input_path=rendered.body_path,
                    output_path=output_path,
                    working_dir=output_path.parent,
                    timeout=config.timeout,
                    options=config.option_set(),
                )
                self._enter(ExportState.COMMAND_BUILT)

                result = self.runner.run(job, artifacts)
                self._enter(ExportState.PROCESS_RUN)
        except Exception as e:
            self._enter(ExportState.FAILED)
            log_export_result(output_path, time.time() - start_time, error=e)
            raise

        self._enter(ExportState.COMPLETED)
        log_export_result(result, time.time() - start_time)
        _log_debug(f"  Size: {result.stat().st_size} bytes")
        return result

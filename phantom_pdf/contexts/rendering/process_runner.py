"""
Renderer Process Execution

Runs the external renderer for one RenderJob under a wall-clock timeout,
turns its outcome into either the output path or an error, and releases the
job's temporary files on every exit path.
"""

import re
import shlex
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from phantom_pdf.contexts.rendering.artifacts import TemporaryArtifacts
from phantom_pdf.contexts.rendering.command import RenderCommand, build_command
from phantom_pdf.contexts.rendering.exceptions import (
    RendererNotFoundError,
    RenderProcessError,
    RenderTimeoutError,
)
from phantom_pdf.contexts.rendering.logger import (
    _log_debug,
    log_command,
    log_process_outcome,
)
from phantom_pdf.contexts.rendering.options import CommandOptionSet
from phantom_pdf.contexts.rendering.paths import (
    PlatformFamily,
    current_platform_family,
)

# The layout script prints "Status: <status>" once the page load finishes
STATUS_PATTERN = re.compile(r"^Status:\s*(\S+)\s*$", re.MULTILINE)


def load_status(stdout_text: str) -> Optional[str]:
    """Last page load status printed by the layout script, or None if absent."""
    matches = STATUS_PATTERN.findall(stdout_text or "")
    return matches[-1] if matches else None


@dataclass(frozen=True)
class RenderJob:
    """
    Everything needed for one renderer invocation. Created once per export call.

    Attributes:
        binary_path: Renderer executable
        script_path: Generated layout script
        input_path: Body HTML file
        output_path: PDF to write
        working_dir: Directory the renderer runs in
        timeout: Wall-clock budget in seconds
        options: Validated renderer options
    """

    binary_path: Path
    script_path: Path
    input_path: Path
    output_path: Path
    working_dir: Path
    timeout: float
    options: CommandOptionSet

    def command(self, platform_family: Optional[PlatformFamily] = None) -> RenderCommand:
        return build_command(
            self.binary_path,
            self.options,
            self.script_path,
            self.input_path,
            self.output_path,
            platform_family,
        )


@dataclass
class ProcessOutcome:
    """
    Result of a finished renderer process.

    Attributes:
        exited_cleanly: Exit status 0 and nothing on stderr
        stderr_text: Error output, verbatim
        return_code: Exit status
        stdout_text: Standard output (the layout script logs its load status here)
    """

    exited_cleanly: bool
    stderr_text: str = ""
    return_code: Optional[int] = None
    stdout_text: str = ""


class ProcessRunner:
    """
    Spawns the renderer and enforces its timeout.

    Args:
        platform_family: Platform used for input path normalization and for
            splitting string command lines (default: the running platform)
    """

    def __init__(self, platform_family: Optional[PlatformFamily] = None):
        self.platform_family = platform_family or current_platform_family()

    def _argv(self, command: Union[RenderCommand, str]) -> list:
        if isinstance(command, RenderCommand):
            return list(command.argv)
        # Windows paths keep their backslashes
        return shlex.split(command, posix=self.platform_family is not PlatformFamily.WINDOWS)

    def execute(self, command: Union[RenderCommand, str], working_dir: Path, timeout: float) -> ProcessOutcome:
        """
        Run a command to completion or until the timeout kills it.

        Args:
            command: RenderCommand, or a space-separated command line
            working_dir: Directory to run in
            timeout: Wall-clock budget in seconds

        Returns:
            ProcessOutcome of the finished process

        Raises:
            RenderTimeoutError: If the process ran past the timeout (it is killed)
            RenderProcessError: If working_dir is not an existing directory
            RendererNotFoundError: If the executable is missing or not runnable
        """
        argv = self._argv(command)
        command_line = " ".join(argv)

        if not Path(working_dir).is_dir():
            raise RenderProcessError(
                f"Working directory does not exist: {working_dir}",
                command_line=command_line,
            )

        try:
            result = subprocess.run(
                argv,
                cwd=working_dir,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid UTF-8 bytes instead of crashing
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            # subprocess.run has already killed and reaped the child
            raise RenderTimeoutError(timeout, command_line) from e
        except (FileNotFoundError, PermissionError, NotADirectoryError) as e:
            raise RendererNotFoundError(f"Could not start renderer: {e}\nCommand: {command_line}") from e

        stderr_text = result.stderr or ""
        return ProcessOutcome(
            exited_cleanly=result.returncode == 0 and not stderr_text,
            stderr_text=stderr_text,
            return_code=result.returncode,
            stdout_text=result.stdout or "",
        )

    def run(self, job: RenderJob, artifacts: Optional[TemporaryArtifacts] = None) -> Path:
        """
        Render one job and return its output path.

        The job's temporary files are released before this returns or raises.

        Args:
            job: The render job
            artifacts: Temporary files owned by the job (script, body html)

        Returns:
            job.output_path, which exists on return

        Raises:
            RenderProcessError: If the renderer wrote to stderr, exited non-zero,
                reported a failed page load, or finished without producing the PDF
            RenderTimeoutError: If the renderer exceeded job.timeout
            RendererNotFoundError: If the renderer could not be started
        """
        with artifacts or TemporaryArtifacts():
            command = job.command(self.platform_family)
            self._remove_previous_output(job, command)
            log_command(command.command_line, job.working_dir)

            start_time = time.time()
            outcome = self.execute(command, job.working_dir, job.timeout)
            log_process_outcome(outcome, time.time() - start_time)

            self._raise_for_outcome(outcome, job, command)

        return job.output_path

    @staticmethod
    def _remove_previous_output(job: RenderJob, command: RenderCommand) -> None:
        # A PDF left by an earlier export must not pass for this render's output
        output_path = Path(job.output_path)
        if not output_path.exists():
            return
        _log_debug(f"Removing previous output {output_path}")
        try:
            output_path.unlink()
        except OSError as e:
            raise RenderProcessError(
                f"Could not replace existing output {output_path}: {e}",
                command_line=command.command_line,
            ) from e

    @staticmethod
    def _raise_for_outcome(outcome: ProcessOutcome, job: RenderJob, command: RenderCommand) -> None:
        if outcome.stderr_text:
            raise RenderProcessError(
                "Renderer reported errors",
                stderr=outcome.stderr_text,
                return_code=outcome.return_code,
                command_line=command.command_line,
                stdout=outcome.stdout_text,
            )
        if outcome.return_code != 0:
            raise RenderProcessError(
                "Renderer exited with a non-zero status",
                return_code=outcome.return_code,
                command_line=command.command_line,
                stdout=outcome.stdout_text,
            )
        status = load_status(outcome.stdout_text)
        if status is not None and status != "success":
            raise RenderProcessError(
                f"Renderer could not load {job.input_path} (Status: {status})",
                return_code=outcome.return_code,
                command_line=command.command_line,
                stdout=outcome.stdout_text,
            )
        if not Path(job.output_path).exists():
            last_line = outcome.stdout_text.strip().splitlines()[-1:] or ["no output"]
            raise RenderProcessError(
                f"Renderer finished without writing {job.output_path} ({last_line[0]})",
                return_code=outcome.return_code,
                command_line=command.command_line,
                stdout=outcome.stdout_text,
            )

"""Custom exceptions for the rendering context."""

from typing import Optional

from phantom_pdf.exceptions import ExportError, TemporaryFileError

__all__ = [
    "ExportError",
    "TemporaryFileError",
    "InvalidOptionError",
    "ExportConfigError",
    "RendererNotFoundError",
    "RenderProcessError",
    "RenderTimeoutError",
]


class InvalidOptionError(ExportError, ValueError):
    """
    Raised in strict mode when a renderer option is unknown or has the wrong kind of value.

    Attributes:
        name: Option name as given
        value: Rejected value
        reason: Why the pair was rejected
    """

    def __init__(self, name: str, value, reason: str):
        self.name = name
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid renderer option --{name}={value!r}: {reason}")


class ExportConfigError(ExportError, ValueError):
    """Raised when the export configuration tree cannot be turned into an ExportConfig."""


class RendererNotFoundError(ExportError):
    """Raised when the renderer executable cannot be located or started."""


class RenderProcessError(ExportError):
    """
    Raised when the renderer process reports a failure.

    Attributes:
        stderr: Error output of the renderer, verbatim
        return_code: Process exit status
        command_line: Command that was run
        stdout: Standard output of the renderer
    """

    def __init__(
        self,
        message: str,
        stderr: str = "",
        return_code: Optional[int] = None,
        command_line: Optional[str] = None,
        stdout: str = "",
    ):
        self.message = message
        self.stderr = stderr
        self.return_code = return_code
        self.command_line = command_line
        self.stdout = stdout

        parts = [message]
        if return_code is not None:
            parts.append(f"Exit status: {return_code}")
        if command_line:
            parts.append(f"Command: {command_line}")
        if stderr:
            parts.append(f"\nRenderer error output:\n{stderr}")

        super().__init__("\n".join(parts))


class RenderTimeoutError(ExportError, TimeoutError):
    """
    Raised when the renderer exceeds its wall-clock budget and is killed.

    Attributes:
        timeout: Budget in seconds
        command_line: Command that was run
    """

    def __init__(self, timeout: float, command_line: Optional[str] = None):
        self.timeout = timeout
        self.command_line = command_line

        message = f"Renderer exceeded timeout of {timeout:g}s and was terminated"
        if command_line:
            message += f"\nCommand: {command_line}"
        super().__init__(message)

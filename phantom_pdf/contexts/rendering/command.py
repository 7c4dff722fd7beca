"""
Renderer command line construction.

The renderer is invoked as::

    <binary> [--option=value ...] <script> <input> <output>

No shell escaping is performed. Paths containing spaces or shell
metacharacters are the caller's responsibility; the argv form is passed to the
process directly, the joined command line is for logs and error messages.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from phantom_pdf.contexts.rendering.options import CommandOptionSet
from phantom_pdf.contexts.rendering.paths import PlatformFamily, normalize_path

PathLike = Union[str, Path]


@dataclass(frozen=True)
class RenderCommand:
    """Argument vector for one renderer invocation."""

    argv: Tuple[str, ...]

    @property
    def command_line(self) -> str:
        return " ".join(self.argv)

    def __str__(self) -> str:
        return self.command_line


def build_command(
    binary_path: PathLike,
    option_set: CommandOptionSet,
    script_path: PathLike,
    input_path: PathLike,
    output_path: PathLike,
    platform_family: Optional[PlatformFamily] = None,
) -> RenderCommand:
    """
    Assemble the renderer command for one job.

    Args:
        binary_path: Renderer executable
        option_set: Validated options, emitted in their insertion order
        script_path: Generated layout script
        input_path: Body HTML file (normalized for the platform)
        output_path: PDF to write
        platform_family: Target platform for input path normalization

    Returns:
        RenderCommand with argv and a printable command_line
    """
    return RenderCommand(
        argv=(
            str(binary_path),
            *option_set.serialize(),
            str(script_path),
            normalize_path(input_path, platform_family),
            str(output_path),
        )
    )

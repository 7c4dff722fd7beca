#!/usr/bin/env python3
"""
HTML to PDF Export CLI

Exports an HTML body (plus optional header/footer fragments) to PDF through the
PhantomJS renderer, and inspects the renderer option schema and layout scripts.

Commands:
    export  - Render an HTML file to PDF
    options - List the renderer options accepted in the 'renderer' config group
    script  - Print the layout script an export would use, without rendering

Examples:\n

    export_pdf.py export report.html report.pdf                            # Defaults (A4 portrait)

    export_pdf.py export report.html report.pdf --footer footer.html       # With footer

    export_pdf.py export report.html report.pdf --set page.orientation=landscape

    export_pdf.py export report.html report.pdf --config pdf.yaml --strict

    export_pdf.py script --footer footer.html                              # Inspect generated script
"""

import os
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from phantom_pdf.contexts.rendering import (
    EnvironmentBinaryLocator,
    ExportError,
    HtmlDocument,
    OPTION_SCHEMA,
    PdfExportPipeline,
    StaticBinaryLocator,
    load_export_config,
)
from phantom_pdf.contexts.rendering.logger import setup_rendering_logger
from phantom_pdf.contexts.rendering.options import OptionKind
from phantom_pdf.contexts.templating import LayoutScript
from phantom_pdf.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


app = typer.Typer(
    help="Export HTML documents to PDF through a headless renderer",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _read_optional(path: Optional[Path]) -> Optional[str]:
    return path.read_text(encoding="utf-8") if path else None


@app.command("export")
def export_command(
    body_html: Annotated[
        Path,
        typer.Argument(help="Rendered body HTML file", exists=True, dir_okay=False),
    ],
    output_pdf: Annotated[
        Path,
        typer.Argument(help="PDF file to write (its directory is created if needed)"),
    ],
    header: Annotated[
        Optional[Path],
        typer.Option("--header", help="Header HTML fragment (@{{numPage}} / @{{totalPages}} allowed)", exists=True),
    ] = None,
    footer: Annotated[
        Optional[Path],
        typer.Option("--footer", help="Footer HTML fragment (@{{numPage}} / @{{totalPages}} allowed)", exists=True),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML export configuration", exists=True),
    ] = None,
    settings: Annotated[
        Optional[List[str]],
        typer.Option("--set", "-s", help="Override a setting, e.g. renderer.load-images=false"),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", "-t", help="Renderer timeout in seconds", min=0.1),
    ] = None,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on invalid renderer options instead of warning"),
    ] = False,
    binary: Annotated[
        Optional[Path],
        typer.Option("--binary", help="Renderer executable (default: $PHANTOMJS_BIN, then PATH)"),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Directory for render.log (default: LOGS_PATH/export_<timestamp>)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug output (command line, renderer stdout/stderr)"),
    ] = False,
):
    """
    Render an HTML file to PDF.

    Examples:\n

        $ export_pdf.py export report.html report.pdf

        $ export_pdf.py export report.html report.pdf --set renderer.ssl-protocol=any --timeout 30
    """
    log_dir = log_dir or LOGS_PATH / f"export_{now()}"
    log_file = setup_rendering_logger(
        log_dir,
        verbose=verbose,
        renderer=binary,
        config_path=config_path,
        timeout=timeout,
        strict=strict,
    )

    dotlist = list(settings or [])
    if timeout is not None:
        dotlist.append(f"timeout={timeout}")
    if strict:
        dotlist.append("strict_options=true")

    typer.secho(f"\nExporting: {body_html}", fg=typer.colors.BLUE, bold=True)

    try:
        config = load_export_config(config_path, dotlist=dotlist)
        locator = StaticBinaryLocator(binary) if binary else EnvironmentBinaryLocator()
        document = HtmlDocument.from_files(body_html, header, footer)

        output_pdf.parent.mkdir(parents=True, exist_ok=True)
        result = PdfExportPipeline(locator).export(document, output_pdf, config)
    except ExportError as e:
        typer.secho(f"\n✗ Export failed: {type(e).__name__}", fg=typer.colors.RED, bold=True)
        for line in str(e).splitlines()[:20]:
            typer.secho(f"  {line}", fg=typer.colors.RED, err=True)
        typer.echo(f"  Log: {log_file}\n")
        raise typer.Exit(code=1)

    typer.secho("\n✓ Export succeeded", fg=typer.colors.GREEN, bold=True)
    typer.echo(f"  PDF: {result}")
    typer.echo(f"  Log: {log_file}\n")


@app.command("options")
def options_command():
    """List renderer options and the values they accept."""
    for option in OPTION_SCHEMA.values():
        if option.kind is OptionKind.ENUM:
            accepted = " | ".join(option.choices)
        else:
            accepted = option.kind.value
        typer.echo(f"  --{option.name:<30} {accepted}")


@app.command("script")
def script_command(
    header: Annotated[
        Optional[Path],
        typer.Option("--header", help="Header HTML fragment", exists=True),
    ] = None,
    footer: Annotated[
        Optional[Path],
        typer.Option("--footer", help="Footer HTML fragment", exists=True),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML export configuration", exists=True),
    ] = None,
    settings: Annotated[
        Optional[List[str]],
        typer.Option("--set", "-s", help="Override a setting, e.g. page.orientation=landscape"),
    ] = None,
):
    """
    Print the layout script for the given configuration and fragments.

    Examples:\n

        $ export_pdf.py script --footer footer.html --set page.format=Letter
    """
    try:
        config = load_export_config(config_path, dotlist=list(settings or []))
        script = LayoutScript.from_layout(
            config.page,
            header_html=_read_optional(header),
            footer_html=_read_optional(footer),
        )
        typer.echo(script.render())
    except ExportError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()

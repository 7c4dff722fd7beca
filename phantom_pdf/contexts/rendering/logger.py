"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from phantom_pdf.utils.logger import setup_logger as _setup_logger
from phantom_pdf.utils.timestamp import format_elapsed

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(
    log_dir: Path,
    verbose: bool = False,
    renderer: Optional[Path] = None,
    config_path: Optional[Path] = None,
    timeout: Optional[float] = None,
    strict: bool = False,
) -> Path:
    """
    Setup logger for rendering context.

    The provenance header records the renderer that will run and the export
    settings given on the command line.

    Args:
        log_dir: Directory for this export session
        verbose: Show DEBUG messages on the console as well
        renderer: Explicit renderer binary (default: $PHANTOMJS_BIN, then PATH)
        config_path: YAML configuration file, if any
        timeout: Timeout given on the command line, if any
        strict: Whether invalid renderer options are fatal

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        provenance={
            "Renderer": renderer or os.getenv("PHANTOMJS_BIN") or "<PATH lookup>",
            "Config": config_path,
            "Timeout": f"{timeout:g}s" if timeout is not None else None,
            "Option mode": "strict" if strict else "lenient",
        },
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(body_source: str, output_path: Path, timeout: float) -> None:
    """Log start of an export with context."""
    _log_info(f"Exporting {body_source} -> {output_path}")
    _log_debug(f"  Timeout: {timeout:g}s")


def log_state_transition(state) -> None:
    """Log a pipeline state change."""
    _log_debug(f"  State: {state.value}")


def log_command(command_line: str, working_dir: Path) -> None:
    _log_debug(f"Running in {working_dir}")
    _log_debug(f"  Command: {command_line}")


def log_process_outcome(outcome, elapsed_time: float) -> None:
    """
    Log the raw outcome of a renderer process.

    Args:
        outcome: ProcessOutcome from ProcessRunner.execute()
        elapsed_time: Seconds the process ran
    """
    _log_debug(f"Renderer exited with status {outcome.return_code} ({format_elapsed(elapsed_time)})")

    # opt(raw=True) keeps multi-line renderer output unprefixed
    if outcome.stdout_text:
        logger.opt(raw=True).debug(
            f"\n{'=' * 80}\nRENDERER STDOUT:\n{'=' * 80}\n{outcome.stdout_text}\n"
        )
    if outcome.stderr_text:
        logger.opt(raw=True).debug(
            f"\n{'=' * 80}\nRENDERER STDERR:\n{'=' * 80}\n{outcome.stderr_text}\n"
        )


def log_export_result(output_path: Path, elapsed_time: float, error: Exception = None) -> None:
    """Log the final result of an export."""
    if error is None:
        _log_success(f"PDF written: {output_path} ({format_elapsed(elapsed_time)})")
    else:
        _log_error(f"Export failed after {format_elapsed(elapsed_time)}: {type(error).__name__}")
        for line in str(error).splitlines()[:10]:
            _log_error(f"  {line}")

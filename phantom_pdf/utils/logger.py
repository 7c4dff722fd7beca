"""
Logger setup for export sessions.

One session writes a DEBUG log file next to an INFO (or DEBUG with --verbose)
console stream, headed by a provenance block that records how the export was
invoked. Context-specific wrappers live in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from dotenv import load_dotenv
from loguru import logger

import phantom_pdf

load_dotenv()

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    provenance: Optional[Mapping[str, object]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route loguru output to {log_dir}/{context_name}.log and stdout.

    Only entry points (CLI scripts) should call this; library code just logs.

    Args:
        context_name: Context identifier, used as the log file name
        log_dir: Directory for this session (created if needed)
        provenance: Session fields for the header; None values are skipped
        console_level: Minimum level shown on the console

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            "render",
            Path("outs/logs/export_20251114_123456"),
            provenance={"Renderer": "/usr/local/bin/phantomjs", "Timeout": "60s"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(provenance)
    return log_file


def provenance_lines(provenance: Optional[Mapping[str, object]] = None) -> List[str]:
    """
    Header lines describing the running session.

    Standard fields (package version, command, working directory, Python)
    come first, followed by the given fields in order. Fields whose value is
    None are left out, so callers can pass optional CLI values unfiltered.
    """
    fields: Dict[str, object] = {
        "phantom_pdf": phantom_pdf.__version__,
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
    }
    fields.update({key: value for key, value in (provenance or {}).items() if value is not None})
    return [f"{key}: {value}" for key, value in fields.items()]


def log_provenance(provenance: Optional[Mapping[str, object]] = None) -> None:
    """Log the provenance header at INFO between two rules."""
    logger.info("=" * 80)
    for line in provenance_lines(provenance):
        logger.info(line)
    logger.info("=" * 80)

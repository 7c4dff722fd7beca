"""
Templating context logger.

Provides logging interface for the templating context with automatic [template] prefix.
All templating modules should import from this module, not from loguru directly.
"""

from pathlib import Path

from loguru import logger

CONTEXT_PREFIX = "[template]"


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_script_generated(script_path: Path, script_text: str, has_header: bool, has_footer: bool) -> None:
    """Log a freshly written layout script, dumping its text at debug level."""
    sections = [name for name, present in (("header", has_header), ("footer", has_footer)) if present]
    _log_debug(f"Layout script written: {script_path}")
    _log_debug(f"  Sections: {', '.join(sections) if sections else 'none'}")
    logger.opt(raw=True).debug(f"\n{'=' * 80}\nLAYOUT SCRIPT:\n{'=' * 80}\n{script_text}\n")

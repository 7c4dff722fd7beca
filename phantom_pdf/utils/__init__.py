"""
Shared utilities for phantom_pdf.

Common functionality used across contexts:
- Logger setup with provenance
- Timestamps for log directories
"""

from phantom_pdf.utils.timestamp import format_elapsed, now

__all__ = ["format_elapsed", "now"]

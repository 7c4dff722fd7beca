"""
Templating Context

Responsibilities:
- Turns header/footer HTML fragments into renderer-script string expressions
- Describes page layout (paper format, orientation, margins, header/footer heights)
- Generates the layout script the renderer executes for one export

Owns: inline fragment templating, layout script text, temporary script files
Never: Spawns the renderer or touches renderer command-line options
"""

from phantom_pdf.contexts.templating.inline import process_inline_html
from phantom_pdf.contexts.templating.layout_script import (
    LayoutScript,
    PageSection,
    generate_layout_script,
    viewport_for,
    write_layout_script,
)
from phantom_pdf.contexts.templating.page_layout import PageLayout

__all__ = [
    # Fragment templating
    "process_inline_html",
    # Layout description
    "PageLayout",
    "viewport_for",
    # Script building and persistence
    "LayoutScript",
    "PageSection",
    "generate_layout_script",
    "write_layout_script",
]

"""
Layout Script Generation

Builds the page-layout script the renderer runs for one export: viewport,
paper size, margins, header/footer callbacks and the open/render/exit action.

The script is assembled from typed pieces (LayoutScript, PageSection) that are
validated before the Jinja2 template serializes them, so a malformed header or
footer fails here instead of inside the renderer.
"""

import json
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from phantom_pdf.contexts.templating.exceptions import LayoutScriptError
from phantom_pdf.contexts.templating.inline import delimiters_balanced, process_inline_html
from phantom_pdf.contexts.templating.logger import log_script_generated
from phantom_pdf.contexts.templating.page_layout import PageLayout
from phantom_pdf.exceptions import TemporaryFileError

TEMPLATES_PATH = Path(__file__).parent / "templates"
SCRIPT_TEMPLATE = "layout_script.js.jinja"
SCRIPT_PREFIX = "report-script-"
SCRIPT_SUFFIX = ".js"

# High-resolution A4 proportions (300 dpi)
LONG_EDGE_PX = 3508
SHORT_EDGE_PX = 2480

# Brace-free delimiters, the script itself is full of { }
_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_PATH)),
    undefined=StrictUndefined,
    variable_start_string="<<<",
    variable_end_string=">>>",
    block_start_string="<%%",
    block_end_string="%%>",
    comment_start_string="<#",
    comment_end_string="#>",
    autoescape=False,
    keep_trailing_newline=True,
)


def viewport_for(orientation: str) -> Tuple[int, int]:
    """
    Viewport (width, height) in pixels for a page orientation.

    Args:
        orientation: "portrait" or "landscape"

    Returns:
        (3508, 2480) for landscape, (2480, 3508) otherwise
    """
    if orientation == "landscape":
        return LONG_EDGE_PX, SHORT_EDGE_PX
    return SHORT_EDGE_PX, LONG_EDGE_PX


def _check_string_expression(expression: str) -> Optional[str]:
    """
    Check that a concatenation of double-quoted literals and bare expressions is well-formed.

    Returns:
        Description of the first problem found, or None if the expression is sound
    """
    in_string = False
    escaped = False
    between: List[str] = []
    segment = ""

    for char in expression:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            elif char == "\n":
                return "line break inside a string literal"
        elif char == '"':
            between.append(segment)
            segment = ""
            in_string = True
        else:
            segment += char

    if in_string:
        return "unterminated string literal"
    between.append(segment)

    if between[0].strip() or between[-1].strip():
        return "expression must start and end with a string literal"

    for inner in between[1:-1]:
        inner = inner.strip()
        if not (inner.startswith("+") and inner.endswith("+") and len(inner) > 2):
            return f"expected '+ <expression> +' between literals, got {inner!r}"
        if not inner[1:-1].strip():
            return "empty expression between delimiters"

    return None


@dataclass(frozen=True)
class PageSection:
    """
    Header or footer block of the paper size descriptor.

    Attributes:
        height: Height reserved for the block (e.g., "25px")
        contents: Templated fragment text (output of process_inline_html)
    """

    height: str
    contents: str

    @classmethod
    def from_fragment(cls, name: str, height: str, fragment: Optional[str]) -> Optional["PageSection"]:
        """Build a section from raw HTML, or None when there is nothing to show."""
        if not fragment or not fragment.strip():
            return None
        if not delimiters_balanced(fragment):
            raise LayoutScriptError("Unbalanced @{{ }} delimiters", section=name, snippet=fragment)
        return cls(height=height, contents=process_inline_html(fragment))

    @property
    def height_literal(self) -> str:
        return json.dumps(self.height)

    @property
    def callback_expression(self) -> str:
        return f'"{self.contents}"'

    def validate(self, name: str) -> None:
        problem = _check_string_expression(self.callback_expression)
        if problem:
            raise LayoutScriptError(
                f"Malformed {name} callback: {problem}",
                section=name,
                snippet=self.callback_expression,
            )


def _margin_literal(margin) -> str:
    """Render a PageLayout margin as a script value."""
    if isinstance(margin, str):
        # Object literals pass through untouched, anything else is a size string
        if margin.startswith("{"):
            if not margin.endswith("}") or margin.count("{") != margin.count("}"):
                raise LayoutScriptError("Unbalanced margin object literal", section="margin", snippet=margin)
            return margin
        return json.dumps(margin)
    return "{" + ", ".join(f"{side}: {json.dumps(size)}" for side, size in margin) + "}"


@dataclass(frozen=True)
class LayoutScript:
    """Typed description of one layout script, validated before rendering."""

    viewport_width: int
    viewport_height: int
    format: str
    orientation: str
    margin: str
    footer: Optional[PageSection] = None
    header: Optional[PageSection] = None

    @classmethod
    def from_layout(
        cls,
        layout: PageLayout,
        header_html: Optional[str] = None,
        footer_html: Optional[str] = None,
    ) -> "LayoutScript":
        width, height = viewport_for(layout.orientation)
        return cls(
            viewport_width=width,
            viewport_height=height,
            format=layout.format,
            orientation=layout.orientation,
            margin=_margin_literal(layout.margin),
            footer=PageSection.from_fragment("footer", layout.footer_height, footer_html),
            header=PageSection.from_fragment("header", layout.header_height, header_html),
        )

    @property
    def sections(self) -> List[Tuple[str, PageSection]]:
        """Present sections in emission order (footer before header)."""
        return [(name, section) for name, section in (("footer", self.footer), ("header", self.header)) if section]

    def validate(self) -> None:
        """
        Check structural well-formedness.

        Raises:
            LayoutScriptError: If a dimension, margin or callback is malformed
        """
        if self.viewport_width <= 0 or self.viewport_height <= 0:
            raise LayoutScriptError(
                f"Viewport must be positive, got {self.viewport_width}x{self.viewport_height}",
                section="viewport",
            )
        if not self.margin:
            raise LayoutScriptError("Margin is empty", section="margin")
        for name, section in self.sections:
            section.validate(name)

    def render(self) -> str:
        """Validate and serialize to script text."""
        self.validate()
        template = _env.get_template(SCRIPT_TEMPLATE)
        return template.render(
            viewport_width=self.viewport_width,
            viewport_height=self.viewport_height,
            format=json.dumps(self.format),
            orientation=json.dumps(self.orientation),
            margin=self.margin,
            sections=self.sections,
        )


def write_layout_script(script_text: str, directory: Optional[Path] = None) -> Path:
    """
    Write script text to a fresh, uniquely named temporary file.

    Args:
        script_text: Rendered layout script
        directory: Where to create the file (default: system temp directory)

    Returns:
        Path to the new file

    Raises:
        TemporaryFileError: If the file cannot be created or written
    """
    try:
        handle, name = tempfile.mkstemp(
            prefix=SCRIPT_PREFIX, suffix=SCRIPT_SUFFIX, dir=str(directory) if directory else None
        )
    except OSError as e:
        raise TemporaryFileError("layout script", original_error=e) from e

    path = Path(name)
    try:
        with os.fdopen(handle, "w", encoding="utf-8") as f:
            f.write(script_text)
    except OSError as e:
        path.unlink(missing_ok=True)
        raise TemporaryFileError("layout script", path=path, original_error=e) from e

    return path


def generate_layout_script(layout: PageLayout, document, directory: Optional[Path] = None) -> Path:
    """
    Generate the layout script for a document and write it to a temporary file.

    Args:
        layout: Page layout for this export
        document: Rendered document (anything with header_fragment/footer_fragment)
        directory: Where to create the script file (default: system temp directory)

    Returns:
        Path to the written script; the caller owns its deletion

    Raises:
        LayoutScriptError: If the header/footer cannot form a valid script
        TemporaryFileError: If the script file cannot be written
    """
    script = LayoutScript.from_layout(
        layout,
        header_html=document.header_fragment,
        footer_html=document.footer_fragment,
    )
    script_text = script.render()
    script_path = write_layout_script(script_text, directory)

    log_script_generated(
        script_path, script_text, has_header=script.header is not None, has_footer=script.footer is not None
    )
    return script_path

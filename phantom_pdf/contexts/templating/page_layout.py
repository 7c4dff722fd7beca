"""
Page layout description for a single export.

PageLayout is an immutable value: it is built once per export call from the
merged configuration and passed explicitly to the script generator.
"""

from dataclasses import dataclass, field
from typing import Dict, Mapping, Tuple, Union

from phantom_pdf.contexts.templating.exceptions import LayoutConfigError

PAPER_FORMATS = ("A4", "A3", "Letter")
ORIENTATIONS = ("portrait", "landscape")
MARGIN_SIDES = ("top", "right", "bottom", "left")

DEFAULT_FORMAT = "A4"
DEFAULT_ORIENTATION = "portrait"
DEFAULT_MARGIN = {"top": "20px", "right": "20px", "bottom": "20px", "left": "20px"}
DEFAULT_HEADER_HEIGHT = "45px"
DEFAULT_FOOTER_HEIGHT = "25px"

Margin = Union[str, Mapping[str, str]]


def _normalize_margin(margin: Margin) -> Union[str, Tuple[Tuple[str, str], ...]]:
    """Freeze a margin mapping into ordered (side, size) pairs; keep literals as-is."""
    if isinstance(margin, str):
        if not margin.strip():
            raise LayoutConfigError("margin", margin)
        return margin.strip()

    if isinstance(margin, Mapping):
        unknown = [side for side in margin if side not in MARGIN_SIDES]
        if unknown:
            raise LayoutConfigError("margin", dict(margin), MARGIN_SIDES)
        return tuple((side, str(margin[side])) for side in MARGIN_SIDES if side in margin)

    raise LayoutConfigError("margin", margin)


@dataclass(frozen=True)
class PageLayout:
    """
    Paper setup for the rendered PDF.

    Attributes:
        format: Paper format, one of A4, A3, Letter
        orientation: portrait or landscape
        margin: Per-side sizes ({"top": "20px", ...}) or a literal margin string ("1cm")
        header_height: Height reserved for the header block
        footer_height: Height reserved for the footer block
    """

    format: str = DEFAULT_FORMAT
    orientation: str = DEFAULT_ORIENTATION
    margin: Margin = field(default_factory=lambda: dict(DEFAULT_MARGIN))
    header_height: str = DEFAULT_HEADER_HEIGHT
    footer_height: str = DEFAULT_FOOTER_HEIGHT

    def __post_init__(self):
        if self.format not in PAPER_FORMATS:
            raise LayoutConfigError("format", self.format, PAPER_FORMATS)
        if self.orientation not in ORIENTATIONS:
            raise LayoutConfigError("orientation", self.orientation, ORIENTATIONS)
        for name in ("header_height", "footer_height"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise LayoutConfigError(name.replace("_", " "), value)

        # frozen dataclass: bypass __setattr__ to store the hashable form
        object.__setattr__(self, "margin", _normalize_margin(self.margin))

    @property
    def is_landscape(self) -> bool:
        return self.orientation == "landscape"

    def margin_sides(self) -> Dict[str, str]:
        """Margin as a dict, or empty when a literal margin string is configured."""
        if isinstance(self.margin, str):
            return {}
        return dict(self.margin)

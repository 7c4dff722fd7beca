"""
Default export configuration.

Values here are the bottom layer of the configuration merge; a YAML file and
explicit overrides are merged on top by config.load_export_config().
"""

import os
from typing import Any, Dict

from dotenv import load_dotenv

from phantom_pdf.contexts.templating.page_layout import (
    DEFAULT_FOOTER_HEIGHT,
    DEFAULT_FORMAT,
    DEFAULT_HEADER_HEIGHT,
    DEFAULT_ORIENTATION,
)

load_dotenv()

DEFAULT_TIMEOUT_S = float(os.getenv("RENDER_TIMEOUT_S", "60"))
DEFAULT_STRICT_OPTIONS = os.getenv("PHANTOM_PDF_STRICT_OPTIONS", "false").lower() == "true"

# Renderer options applied to every export unless overridden
DEFAULT_RENDERER_OPTIONS: Dict[str, Any] = {}


def get_default_config() -> Dict[str, Any]:
    """
    Get the complete default configuration tree.

    margin is None so a literal margin string from a later layer can replace
    it; PageLayout fills in 20px on every side.

    Returns:
        Fresh dict, safe to mutate
    """
    return {
        "page": {
            "format": DEFAULT_FORMAT,
            "orientation": DEFAULT_ORIENTATION,
            "margin": None,
        },
        "header": {"height": DEFAULT_HEADER_HEIGHT},
        "footer": {"height": DEFAULT_FOOTER_HEIGHT},
        "renderer": DEFAULT_RENDERER_OPTIONS.copy(),
        "timeout": DEFAULT_TIMEOUT_S,
        "strict_options": DEFAULT_STRICT_OPTIONS,
    }

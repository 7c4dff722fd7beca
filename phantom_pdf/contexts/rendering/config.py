"""
Export Configuration

Merges the default configuration, an optional YAML file and explicit
overrides (later layers win) into one immutable ExportConfig per export call.

Examples:
    # Defaults only
    >>> config = load_export_config()

    # YAML file plus overrides
    >>> config = load_export_config(
    ...     Path("configs/invoice.yaml"),
    ...     overrides={"page": {"orientation": "landscape"}, "renderer": {"load-images": False}},
    ... )

    # Dotted overrides, as passed on the command line
    >>> config = load_export_config(dotlist=["renderer.ssl-protocol=any", "timeout=30"])
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from phantom_pdf.contexts.rendering.defaults import (
    DEFAULT_STRICT_OPTIONS,
    DEFAULT_TIMEOUT_S,
    get_default_config,
)
from phantom_pdf.contexts.rendering.exceptions import ExportConfigError
from phantom_pdf.contexts.rendering.options import CommandOptionSet
from phantom_pdf.contexts.templating.page_layout import (
    DEFAULT_FOOTER_HEIGHT,
    DEFAULT_FORMAT,
    DEFAULT_HEADER_HEIGHT,
    DEFAULT_MARGIN,
    DEFAULT_ORIENTATION,
    PageLayout,
)

CONFIG_KEYS = {"page", "header", "footer", "renderer", "timeout", "strict_options"}

# Config files may nest everything under a top-level "pdf" key
PDF_SECTION = "pdf"


@dataclass(frozen=True)
class ExportConfig:
    """
    Immutable settings for one export call.

    Attributes:
        page: Paper format, orientation, margins and header/footer heights
        options: Accepted renderer options, in order
        timeout: Renderer wall-clock budget in seconds
        strict_options: Raise on invalid renderer options instead of warning
    """

    page: PageLayout = field(default_factory=PageLayout)
    options: Tuple[Tuple[str, Any], ...] = ()
    timeout: float = DEFAULT_TIMEOUT_S
    strict_options: bool = DEFAULT_STRICT_OPTIONS

    def __post_init__(self):
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, (int, float)) or self.timeout <= 0:
            raise ExportConfigError(f"timeout must be a positive number of seconds, got {self.timeout!r}")

    def option_set(self) -> CommandOptionSet:
        """Fresh CommandOptionSet for one job."""
        return CommandOptionSet.from_mapping(dict(self.options), strict=self.strict_options)


def _section(tree: Mapping[str, Any], key: str) -> Dict[str, Any]:
    value = tree.get(key) or {}
    if not isinstance(value, Mapping):
        raise ExportConfigError(f"'{key}' must be a mapping, got {type(value).__name__}")
    return dict(value)


def export_config_from_tree(tree: Mapping[str, Any]) -> ExportConfig:
    """
    Build an ExportConfig from a plain configuration tree.

    Renderer options are validated here, so strict mode fails before any
    temporary file exists.

    Args:
        tree: Dict with page/header/footer/renderer/timeout/strict_options keys

    Returns:
        ExportConfig

    Raises:
        ExportConfigError: For unknown keys or malformed sections
        LayoutConfigError: For unsupported page settings
        InvalidOptionError: For invalid renderer options in strict mode
    """
    unknown = set(tree) - CONFIG_KEYS
    if unknown:
        raise ExportConfigError(
            f"Unknown configuration keys: {sorted(unknown)}. Expected: {sorted(CONFIG_KEYS)}"
        )

    page = _section(tree, "page")
    header = _section(tree, "header")
    footer = _section(tree, "footer")
    margin = page.get("margin")

    layout = PageLayout(
        format=page.get("format") or DEFAULT_FORMAT,
        orientation=page.get("orientation") or DEFAULT_ORIENTATION,
        margin=dict(DEFAULT_MARGIN) if margin is None else margin,
        header_height=str(header.get("height") or DEFAULT_HEADER_HEIGHT),
        footer_height=str(footer.get("height") or DEFAULT_FOOTER_HEIGHT),
    )

    strict = bool(tree.get("strict_options", DEFAULT_STRICT_OPTIONS))
    option_set = CommandOptionSet.from_mapping(_section(tree, "renderer"), strict=strict)

    return ExportConfig(
        page=layout,
        options=tuple(option_set.as_dict().items()),
        timeout=tree.get("timeout", DEFAULT_TIMEOUT_S),
        strict_options=strict,
    )


def load_export_config(
    config_path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    dotlist: Optional[List[str]] = None,
) -> ExportConfig:
    """
    Merge configuration layers into an ExportConfig.

    Layers, lowest first: defaults, YAML file, overrides mapping, dotlist.

    Args:
        config_path: Optional YAML file (may nest settings under 'pdf')
        overrides: Optional nested mapping of settings
        dotlist: Optional 'key.path=value' strings (values parsed as YAML)

    Returns:
        ExportConfig

    Raises:
        ExportConfigError: If a layer cannot be read or merged
    """
    try:
        layers = [OmegaConf.create(get_default_config())]

        if config_path is not None:
            file_config = OmegaConf.load(config_path)
            if PDF_SECTION in file_config:
                file_config = file_config[PDF_SECTION]
            layers.append(file_config)

        if overrides:
            layers.append(OmegaConf.create(dict(overrides)))

        if dotlist:
            layers.append(OmegaConf.from_dotlist(list(dotlist)))

        merged = OmegaConf.to_container(OmegaConf.merge(*layers), resolve=True)
    except (OSError, OmegaConfBaseException) as e:
        raise ExportConfigError(f"Could not load export configuration: {e}") from e

    return export_config_from_tree(merged)

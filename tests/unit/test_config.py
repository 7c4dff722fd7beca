"""Unit tests for export configuration loading."""

import pytest

from phantom_pdf.contexts.rendering.config import (
    ExportConfig,
    export_config_from_tree,
    load_export_config,
)
from phantom_pdf.contexts.rendering.defaults import DEFAULT_TIMEOUT_S, get_default_config
from phantom_pdf.contexts.rendering.exceptions import ExportConfigError, InvalidOptionError
from phantom_pdf.contexts.templating.exceptions import LayoutConfigError


@pytest.mark.unit
def test_defaults():
    config = load_export_config()

    assert config.page.format == "A4"
    assert config.page.orientation == "portrait"
    assert config.page.margin_sides() == {"top": "20px", "right": "20px", "bottom": "20px", "left": "20px"}
    assert config.page.header_height == "45px"
    assert config.page.footer_height == "25px"
    assert config.options == ()
    assert config.timeout == DEFAULT_TIMEOUT_S


@pytest.mark.unit
def test_default_config_is_a_fresh_copy():
    first = get_default_config()
    first["renderer"]["debug"] = True
    assert get_default_config()["renderer"] == {}


@pytest.mark.unit
def test_overrides_merge_over_defaults():
    config = load_export_config(
        overrides={
            "page": {"orientation": "landscape", "margin": "1cm"},
            "footer": {"height": "30px"},
            "renderer": {"load-images": False, "ssl-protocol": "any"},
            "timeout": 15,
        }
    )

    assert config.page.format == "A4"
    assert config.page.orientation == "landscape"
    assert config.page.margin == "1cm"
    assert config.page.footer_height == "30px"
    assert config.page.header_height == "45px"
    assert config.options == (("load-images", False), ("ssl-protocol", "any"))
    assert config.timeout == 15


@pytest.mark.unit
def test_yaml_file_with_pdf_section(tmp_path):
    config_file = tmp_path / "export.yaml"
    config_file.write_text(
        """
pdf:
  page:
    format: Letter
    margin:
      top: 1cm
      bottom: 1cm
  renderer:
    web-security: false
    proxy-type: socks5
""",
        encoding="utf-8",
    )

    config = load_export_config(config_file, overrides={"page": {"format": "A3"}})

    assert config.page.format == "A3"
    assert config.page.margin_sides() == {"top": "1cm", "bottom": "1cm"}
    assert config.option_set().serialize() == ("--web-security=false", "--proxy-type=socks5")


@pytest.mark.unit
def test_dotlist_values_are_typed():
    config = load_export_config(dotlist=["renderer.load-images=false", "renderer.max-disk-cache-size=2048", "timeout=2.5"])

    assert config.options == (("load-images", False), ("max-disk-cache-size", 2048))
    assert config.timeout == 2.5


@pytest.mark.unit
def test_invalid_options_dropped_in_lenient_mode():
    config = load_export_config(overrides={"renderer": {"bogus": True, "debug": "yes", "disk-cache": True}})
    assert config.options == (("disk-cache", True),)


@pytest.mark.unit
def test_invalid_options_raise_in_strict_mode():
    with pytest.raises(InvalidOptionError):
        load_export_config(overrides={"strict_options": True, "renderer": {"proxy-type": "ftp"}})


@pytest.mark.unit
def test_unknown_top_level_key():
    with pytest.raises(ExportConfigError, match="Unknown configuration keys"):
        export_config_from_tree({"pages": {}})


@pytest.mark.unit
def test_invalid_page_format():
    with pytest.raises(LayoutConfigError, match="A4, A3, Letter"):
        load_export_config(overrides={"page": {"format": "B5"}})


@pytest.mark.unit
@pytest.mark.parametrize("timeout", [0, -1, "soon", True])
def test_invalid_timeout(timeout):
    with pytest.raises(ExportConfigError):
        ExportConfig(timeout=timeout)


@pytest.mark.unit
def test_missing_config_file(tmp_path):
    with pytest.raises(ExportConfigError, match="Could not load"):
        load_export_config(tmp_path / "nope.yaml")


@pytest.mark.unit
def test_config_is_immutable():
    config = ExportConfig()
    with pytest.raises(AttributeError):
        config.timeout = 1

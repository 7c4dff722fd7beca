"""Unit tests for the renderer option schema and CommandOptionSet."""

import pytest

from phantom_pdf.contexts.rendering.exceptions import InvalidOptionError
from phantom_pdf.contexts.rendering.options import (
    OPTION_SCHEMA,
    CommandOptionSet,
    OptionKind,
    format_option_value,
)


@pytest.mark.unit
def test_schema_covers_renderer_options():
    """Test that every documented renderer option is in the schema."""
    expected = {
        "debug", "cookies-file", "disk-cache", "load-images", "local-storage-path",
        "local-storage-quota", "local-to-remote-url-access", "max-disk-cache-size",
        "output-encoding", "proxy", "proxy-type", "proxy-auth", "script-encoding",
        "ssl-protocol", "ssl-certificates-path", "web-security", "webdriver",
        "webdriver-selenium-grid-hub",
    }
    assert set(OPTION_SCHEMA) == expected
    assert OPTION_SCHEMA["proxy-type"].choices == ("http", "socks5", "none")
    assert OPTION_SCHEMA["ssl-protocol"].choices == ("sslv3", "sslv2", "tlsv1", "any")
    assert OPTION_SCHEMA["local-storage-quota"].kind is OptionKind.INTEGER


@pytest.mark.unit
@pytest.mark.parametrize("name", ["not-an-option", "Debug", "--debug", ""])
def test_unknown_option_leaves_set_unchanged(name):
    """Test that names outside the schema are never admitted."""
    options = CommandOptionSet().add("debug", True)

    options.add(name, True)

    assert options.as_dict() == {"debug": True}


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,value",
    [
        ("debug", "true"),
        ("debug", 1),
        ("proxy", ""),
        ("proxy", 8080),
        ("proxy-type", "https"),
        ("ssl-protocol", "TLSv1"),
        ("max-disk-cache-size", -1),
        ("max-disk-cache-size", True),
        ("local-storage-quota", "100"),
    ],
)
def test_value_of_wrong_kind_is_rejected(name, value):
    """Test that values failing their declared kind are dropped in lenient mode."""
    options = CommandOptionSet()
    options.add(name, value)
    assert name not in options
    assert len(options) == 0


@pytest.mark.unit
def test_strict_mode_raises_and_keeps_set_unchanged():
    """Test that strict mode surfaces invalid options as errors."""
    options = CommandOptionSet(strict=True).add("load-images", False)

    with pytest.raises(InvalidOptionError) as excinfo:
        options.add("proxy-type", "https")

    assert excinfo.value.name == "proxy-type"
    assert "http, socks5, none" in str(excinfo.value)
    assert options.as_dict() == {"load-images": False}

    with pytest.raises(InvalidOptionError, match="unknown option"):
        options.add("bogus", "x")


@pytest.mark.unit
def test_lenient_mode_warns(log_messages):
    """Test that lenient mode reports dropped options instead of hiding them."""
    CommandOptionSet().add("bogus", "x")

    warnings = [m for m in log_messages if m.startswith("WARNING")]
    assert len(warnings) == 1
    assert "--bogus='x'" in warnings[0]
    assert "unknown option" in warnings[0]


@pytest.mark.unit
def test_boolean_serialization():
    """Test that booleans render as literal true/false tokens."""
    options = CommandOptionSet().add("disk-cache", True).add("web-security", False)
    assert options.serialize() == ("--disk-cache=true", "--web-security=false")


@pytest.mark.unit
def test_serialization_preserves_insertion_order():
    """Test that tokens come out in the order options were added."""
    options = CommandOptionSet()
    options.add("ssl-protocol", "any").add("debug", False).add("max-disk-cache-size", 1024)
    options.add("proxy", "192.168.1.42:8080")

    assert options.serialize() == (
        "--ssl-protocol=any",
        "--debug=false",
        "--max-disk-cache-size=1024",
        "--proxy=192.168.1.42:8080",
    )


@pytest.mark.unit
def test_readding_option_keeps_position():
    """Test that replacing a value does not move the option."""
    options = CommandOptionSet().add("debug", True).add("proxy-type", "http")
    options.add("debug", False)

    assert options.serialize() == ("--debug=false", "--proxy-type=http")


@pytest.mark.unit
def test_from_mapping_and_remove():
    """Test bulk construction and removal."""
    options = CommandOptionSet.from_mapping({"load-images": True, "bogus": 1, "webdriver": "8910"})
    assert list(options) == ["load-images", "webdriver"]

    options.remove("load-images").remove("not-there")
    assert options.serialize() == ("--webdriver=8910",)


@pytest.mark.unit
def test_format_option_value():
    assert format_option_value(True) == "true"
    assert format_option_value(False) == "false"
    assert format_option_value(0) == "0"
    assert format_option_value("utf8") == "utf8"

"""Unit tests for renderer command construction."""

import pytest

from phantom_pdf.contexts.rendering.command import RenderCommand, build_command
from phantom_pdf.contexts.rendering.options import CommandOptionSet
from phantom_pdf.contexts.rendering.paths import PlatformFamily


@pytest.mark.unit
def test_command_layout():
    """Test binary, options, script, input and output order."""
    options = CommandOptionSet().add("load-images", True).add("ssl-protocol", "any")

    command = build_command(
        "/opt/phantomjs/bin/phantomjs",
        options,
        "/tmp/report-script-1.js",
        "/tmp/report-body-1.html",
        "/srv/out/report.pdf",
        PlatformFamily.OTHER,
    )

    assert command.command_line == (
        "/opt/phantomjs/bin/phantomjs --load-images=true --ssl-protocol=any "
        "/tmp/report-script-1.js /tmp/report-body-1.html /srv/out/report.pdf"
    )
    assert command.argv[1:3] == ("--load-images=true", "--ssl-protocol=any")
    assert str(command) == command.command_line


@pytest.mark.unit
def test_command_without_options():
    command = build_command("phantomjs", CommandOptionSet(), "s.js", "in.html", "out.pdf", PlatformFamily.OTHER)
    assert command.argv == ("phantomjs", "s.js", "in.html", "out.pdf")


@pytest.mark.unit
def test_only_input_path_is_normalized_on_windows():
    command = build_command(
        "C:\\phantom\\phantomjs.exe",
        CommandOptionSet().add("debug", False),
        "C:\\Temp\\report-script-1.js",
        "C:\\Temp\\report-body-1.html",
        "C:\\out\\report.pdf",
        PlatformFamily.WINDOWS,
    )

    assert command.argv == (
        "C:\\phantom\\phantomjs.exe",
        "--debug=false",
        "C:\\Temp\\report-script-1.js",
        "file:///C:/Temp/report-body-1.html",
        "C:\\out\\report.pdf",
    )


@pytest.mark.unit
def test_paths_are_not_escaped():
    """Test that spaces are passed through untouched (caller's responsibility)."""
    command = build_command("phantomjs", CommandOptionSet(), "a b.js", "c d.html", "e f.pdf", PlatformFamily.OTHER)
    assert command.command_line == "phantomjs a b.js c d.html e f.pdf"
    assert isinstance(command, RenderCommand)

"""
Shared fixtures: a fake renderer executable and a private temp directory.

The fake renderer accepts the real renderer's argument layout
(``[--option=value ...] <script> <input> <output>``) and is steered through
environment variables:

- FAKE_RENDERER_SLEEP: seconds to sleep before doing anything
- FAKE_RENDERER_STDERR: text to write to stderr (then exit 1)
- FAKE_RENDERER_STATUS: page load status; anything but "success" skips rendering
- FAKE_RENDERER_EXIT: exit status after a successful render
- FAKE_RENDERER_RECORD: directory receiving argv.txt and script.js copies
"""

import stat
import sys
import tempfile
from pathlib import Path

import pytest
from loguru import logger

FAKE_RENDERER_SOURCE = r'''
import os
import sys
import time

argv = sys.argv[1:]
positional = [arg for arg in argv if not arg.startswith("--")]
script_path, input_path, output_path = positional

record_dir = os.environ.get("FAKE_RENDERER_RECORD")
if record_dir:
    with open(os.path.join(record_dir, "argv.txt"), "w", encoding="utf-8") as f:
        f.write("\n".join(argv))
    with open(script_path, encoding="utf-8") as src, open(os.path.join(record_dir, "script.js"), "w", encoding="utf-8") as dst:
        dst.write(src.read())

time.sleep(float(os.environ.get("FAKE_RENDERER_SLEEP", "0")))

error_text = os.environ.get("FAKE_RENDERER_STDERR")
if error_text:
    sys.stderr.write(error_text)
    sys.exit(1)

status = os.environ.get("FAKE_RENDERER_STATUS", "success")
print("Status: " + status)
if status == "success":
    with open(input_path, encoding="utf-8") as f:
        body = f.read()
    with open(output_path, "w", encoding="utf-8") as f:
        f.write("%PDF-1.4\n% fake render of " + str(len(body)) + " chars\n")

sys.exit(int(os.environ.get("FAKE_RENDERER_EXIT", "0")))
'''


@pytest.fixture
def fake_renderer(tmp_path) -> Path:
    """Executable that behaves like the renderer, driven by FAKE_RENDERER_* env vars."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()

    source = bin_dir / "fake_renderer.py"
    source.write_text(FAKE_RENDERER_SOURCE, encoding="utf-8")

    # Short /bin/sh shebang, interpreter paths can exceed the kernel's shebang limit
    wrapper = bin_dir / "phantomjs"
    wrapper.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{source}" "$@"\n', encoding="utf-8")
    wrapper.chmod(wrapper.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return wrapper


@pytest.fixture
def record_dir(tmp_path, monkeypatch) -> Path:
    """Directory where the fake renderer records its argv and script."""
    directory = tmp_path / "record"
    directory.mkdir()
    monkeypatch.setenv("FAKE_RENDERER_RECORD", str(directory))
    return directory


@pytest.fixture
def private_tempdir(tmp_path, monkeypatch) -> Path:
    """Route tempfile.mkstemp() without dir= into an isolated, initially empty directory."""
    directory = tmp_path / "tmp"
    directory.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(directory))
    return directory


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda message: messages.append(str(message)), level="DEBUG", format="{level} {message}")
    yield messages
    logger.remove(handler_id)

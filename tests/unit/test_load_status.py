"""
Tests for reading the page load status the layout script prints.
"""

import pytest

from phantom_pdf.contexts.rendering.process_runner import load_status

pytestmark = pytest.mark.unit


def test_success_status():
    assert load_status("Status: success\n") == "success"


def test_failed_status_after_other_output():
    assert load_status("Loading fonts\nStatus: fail\n") == "fail"


def test_last_status_wins():
    assert load_status("Status: success\nStatus: fail\n") == "fail"


@pytest.mark.parametrize("stdout", ["", "rendering done\n", "status: success"])
def test_no_status_line(stdout):
    assert load_status(stdout) is None

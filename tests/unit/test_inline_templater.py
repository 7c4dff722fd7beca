"""Unit tests for inline header/footer templating."""

import pytest

from phantom_pdf.contexts.templating.inline import (
    compact,
    delimiters_balanced,
    process_inline_html,
)


@pytest.mark.unit
def test_page_number_expressions_are_spliced():
    """Test exact delimiter substitution for page counters."""
    result = process_inline_html("Page @{{numPage}} of @{{totalPages}}")

    assert result == 'Page " + numPage + " of " + totalPages + "'
    # Wrapped the way the layout script does it
    assert f'"{result}"' == '"Page " + numPage + " of " + totalPages + ""'


@pytest.mark.unit
def test_double_quotes_become_single_quotes():
    result = process_inline_html('<div class="footer" style="text-align: right">Confidential</div>')
    assert result == "<div class='footer' style='text-align: right'>Confidential</div>"


@pytest.mark.unit
def test_quotes_replaced_before_delimiters():
    """Test that quote substitution never touches the inserted concatenation quotes."""
    result = process_inline_html('<span id="n">@{{numPage}}</span>')
    assert result == "<span id='n'>\" + numPage + \"</span>"


@pytest.mark.unit
def test_whitespace_is_compacted():
    fragment = """
        <div>
            <b>ACME Corp</b>\t\tPage @{{numPage}}
        </div>
    """
    assert process_inline_html(fragment) == '<div> <b>ACME Corp</b> Page " + numPage + " </div>'


@pytest.mark.unit
@pytest.mark.parametrize("fragment", [None, ""])
def test_empty_fragment(fragment):
    assert process_inline_html(fragment) == ""


@pytest.mark.unit
def test_no_html_escaping():
    assert process_inline_html("<b>a & b</b>") == "<b>a & b</b>"


@pytest.mark.unit
def test_compact():
    assert compact("  a \n\n b\t c  ") == "a b c"


@pytest.mark.unit
@pytest.mark.parametrize(
    "fragment,balanced",
    [
        ("Page @{{numPage}} of @{{totalPages}}", True),
        ("No expressions", True),
        ("Page @{{numPage", False),
        ("Page numPage}}", False),
        ("@{{a @{{b}} }}", False),
    ],
)
def test_delimiters_balanced(fragment, balanced):
    assert delimiters_balanced(fragment) is balanced

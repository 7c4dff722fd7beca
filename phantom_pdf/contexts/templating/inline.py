"""
Inline header/footer templating.

Header and footer HTML is returned from a renderer callback as a double-quoted
script string. Content between ``@{{`` and ``}}`` is spliced in as a script
expression instead of literal text, so a footer such as::

    Page @{{numPage}} of @{{totalPages}}

becomes ``Page " + numPage + " of " + totalPages + "``, which the layout
script wraps in quotes to produce
``"Page " + numPage + " of " + totalPages + ""``.

No HTML escaping is performed beyond the quote substitution; callers are
responsible for sanitizing fragment content.
"""

import re
from typing import Optional

OPEN_DELIMITER = "@{{"
CLOSE_DELIMITER = "}}"

OPEN_REPLACEMENT = '" + '
CLOSE_REPLACEMENT = ' + "'

_WHITESPACE_RUN = re.compile(r"\s+")


def compact(text: str) -> str:
    """Collapse every whitespace run (newlines included) into one space."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def process_inline_html(fragment: Optional[str]) -> str:
    """
    Convert an HTML fragment into the body of a double-quoted script literal.

    Steps, in order:
    1. Double quotes become single quotes (the result sits inside "...")
    2. ``@{{`` becomes ``" + `` and ``}}`` becomes `` + "``
    3. Whitespace is compacted so the script stays on one line

    Args:
        fragment: Header or footer HTML (None or empty yields "")

    Returns:
        Templated text, ready to be wrapped in double quotes
    """
    if not fragment:
        return ""

    text = fragment.replace('"', "'")
    text = text.replace(OPEN_DELIMITER, OPEN_REPLACEMENT)
    text = text.replace(CLOSE_DELIMITER, CLOSE_REPLACEMENT)
    return compact(text)


def delimiters_balanced(fragment: str) -> bool:
    """
    Check that every ``@{{`` is closed by a ``}}`` before the next one opens.

    Args:
        fragment: Raw header/footer HTML

    Returns:
        True if delimiters pair up without nesting
    """
    depth = 0
    position = 0
    while position < len(fragment):
        if fragment.startswith(OPEN_DELIMITER, position):
            if depth:
                return False
            depth = 1
            position += len(OPEN_DELIMITER)
        elif fragment.startswith(CLOSE_DELIMITER, position):
            if not depth:
                return False
            depth = 0
            position += len(CLOSE_DELIMITER)
        else:
            position += 1
    return depth == 0

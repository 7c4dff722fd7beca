"""Custom exceptions for the templating context."""

from typing import Optional

from phantom_pdf.exceptions import ExportError


class LayoutConfigError(ExportError, ValueError):
    """
    Raised when a page layout value is not one the renderer understands.

    Attributes:
        field: Layout field that was rejected (e.g., 'format')
        value: The rejected value
        allowed: Accepted values, when the field is enumerated
    """

    def __init__(self, field: str, value, allowed: Optional[tuple] = None):
        self.field = field
        self.value = value
        self.allowed = allowed

        message = f"Invalid page {field}: {value!r}"
        if allowed:
            message += f" (expected one of: {', '.join(allowed)})"
        super().__init__(message)


class LayoutScriptError(ExportError, ValueError):
    """
    Raised when the layout script would not be well-formed.

    Attributes:
        message: Error description
        section: Script section at fault (e.g., 'header', 'margin')
        snippet: Offending text, truncated for display
    """

    def __init__(self, message: str, section: Optional[str] = None, snippet: Optional[str] = None):
        self.message = message
        self.section = section
        self.snippet = snippet

        parts = [message]
        if section:
            parts.append(f"Section: {section}")
        if snippet:
            snippet = snippet[:200] + "..." if len(snippet) > 200 else snippet
            parts.append(f"Text:\n{snippet}")

        super().__init__("\n".join(parts))

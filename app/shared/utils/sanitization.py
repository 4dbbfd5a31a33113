"""Input sanitization utilities: HTML stripping for indexed page content."""

import html
import re
from typing import ClassVar

import nh3


class InputSanitizer:
    """
    Strip markup from user-authored content before it is scored or shown.

    Page content is stored as rich text HTML; search only ever looks at the
    visible text, and snippets must never carry markup back to the UI.
    """

    ALLOWED_TAGS: ClassVar[set[str]] = set()
    WHITESPACE_PATTERN: ClassVar[re.Pattern[str]] = re.compile(r"\s+")
    BLOCK_TAG_PATTERN: ClassVar[re.Pattern[str]] = re.compile(
        r"<\s*(br|/p|/div|/li|/h[1-6]|/tr|/td)\b[^>]*>", re.IGNORECASE
    )

    @classmethod
    def sanitize_html(cls, value: str) -> str:
        """Remove all HTML tags with nh3 (strict, no tags allowed).

        Args:
            value: Raw string that may contain HTML.

        Returns:
            Sanitized string safe for HTML display.
        """
        if not value:
            return value
        return nh3.clean(value, tags=cls.ALLOWED_TAGS, attributes={})

    @classmethod
    def html_to_text(cls, value: str) -> str:
        """Return the visible text of an HTML fragment as a single line.

        Block-level closing tags become spaces so words on adjacent lines
        do not run together; entities are unescaped.

        Args:
            value: HTML fragment (may be plain text).

        Returns:
            Plain text with collapsed whitespace.
        """
        if not value:
            return ""
        spaced = cls.BLOCK_TAG_PATTERN.sub(" ", value)
        text = html.unescape(cls.sanitize_html(spaced))
        return cls.WHITESPACE_PATTERN.sub(" ", text).strip()


def strip_html(value: str) -> str:
    """Return plain text for an HTML fragment (see InputSanitizer.html_to_text)."""
    return InputSanitizer.html_to_text(value)

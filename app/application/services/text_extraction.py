"""Text extraction for scoring and display: page content flattening and snippets."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from app.shared.utils.sanitization import strip_html

# Keys inside page content JSON whose values are never indexed or displayed.
# A key is secret when any of its words (split on _, -, spaces and camelCase)
# is one of SECRET_WORDS, or two adjacent words form one of SECRET_PAIRS.
SECRET_WORDS = frozenset({
    "password", "passwd", "pwd", "passphrase", "secret", "token",
    "apikey", "pin", "credential", "credentials",
})
SECRET_PAIRS = frozenset({
    ("api", "key"), ("private", "key"), ("license", "key"), ("secret", "key"),
    ("access", "key"),
})

_KEY_WORD = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")

_CONTACT_KEYS = ("name", "email", "phone", "notes")
_LOCATION_KEYS = ("name", "address", "city", "notes")
_MAX_DEPTH = 20

SNIPPET_CONTEXT_CHARS = 50
SNIPPET_MAX_CHARS = 150


def key_words(key: str) -> list[str]:
    """Split a JSON key into lowercase words (snake, kebab and camelCase)."""
    return [word.lower() for word in _KEY_WORD.findall(key)]


def _is_secret_key(key: Any) -> bool:
    if not isinstance(key, str):
        return False
    words = key_words(key)
    if any(word in SECRET_WORDS for word in words):
        return True
    return any(pair in SECRET_PAIRS for pair in zip(words, words[1:]))


def _join_entries(entries: Any, keys: tuple[str, ...]) -> str:
    if not isinstance(entries, list):
        return ""
    parts = []
    for entry in entries:
        if isinstance(entry, Mapping):
            parts.append(" ".join(str(entry.get(k) or "") for k in keys))
    return " ".join(" ".join(parts).split())


def _flatten_strings(value: Any, depth: int = 0) -> Iterable[str]:
    """Yield every non-secret string leaf of a JSON value (depth-bounded)."""
    if depth > _MAX_DEPTH:
        return
    if isinstance(value, str):
        yield strip_html(value)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        yield str(value)
    elif isinstance(value, Mapping):
        for key, item in value.items():
            if not _is_secret_key(key):
                yield from _flatten_strings(item, depth + 1)
    elif isinstance(value, list):
        for item in value:
            yield from _flatten_strings(item, depth + 1)


def extract_content_text(content_data: Any) -> str:
    """Return the searchable text of a page's content_data.

    Rich text ({"content": "<p>..."}) is stripped of markup; contact and
    location lists keep only their identifying fields; any other JSON is
    flattened to its string leaves with secret-looking keys skipped.

    Args:
        content_data: JSON value stored for the page (str, dict, list or None).

    Returns:
        Plain text with collapsed whitespace (empty string when nothing to index).
    """
    if content_data is None:
        return ""
    if isinstance(content_data, str):
        return strip_html(content_data)
    if isinstance(content_data, Mapping):
        content = content_data.get("content")
        if isinstance(content, str):
            return strip_html(content)
        if "contacts" in content_data:
            return _join_entries(content_data["contacts"], _CONTACT_KEYS)
        if "locations" in content_data:
            return _join_entries(content_data["locations"], _LOCATION_KEYS)
    return " ".join(" ".join(_flatten_strings(content_data)).split())


def extract_snippet(
    text: str | None,
    anchors: Iterable[str] = (),
    max_chars: int = SNIPPET_MAX_CHARS,
    context_chars: int = SNIPPET_CONTEXT_CHARS,
) -> str | None:
    """Return an excerpt of text around the first anchor found in it.

    Anchors are tried in order (case-insensitive). Without a hit the head of
    the text is returned. Ellipses mark truncation on either side.

    Args:
        text: Source text (already free of secrets).
        anchors: Matched words to center the excerpt on.
        max_chars: Length of the head excerpt when no anchor is found.
        context_chars: Characters kept on each side of the anchor.

    Returns:
        Excerpt, or None when text is empty.
    """
    if not text:
        return None
    lowered = text.lower()
    for anchor in anchors:
        if not anchor:
            continue
        index = lowered.find(anchor.lower())
        if index == -1:
            continue
        start = max(0, index - context_chars)
        end = min(len(text), index + len(anchor) + context_chars)
        excerpt = text[start:end].strip()
        if start > 0:
            excerpt = "..." + excerpt
        if end < len(text):
            excerpt = excerpt + "..."
        return excerpt
    if len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip() + "..."

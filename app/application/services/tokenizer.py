"""Query and candidate text normalization.

normalize() is the single place where text becomes tokens, so queries and
the records they are compared against always go through the same rules.
"""

from __future__ import annotations

import re
import unicodedata

_APOSTROPHES = re.compile(r"['’‘`]")
# Anything that is not a lowercase ASCII letter, digit or hyphen separates tokens.
_SEPARATORS = re.compile(r"[^a-z0-9-]+")


def _strip_diacritics(value: str) -> str:
    decomposed = unicodedata.normalize("NFKD", value)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize(raw: str | None) -> list[str]:
    """Turn raw text into an ordered list of canonical tokens.

    Lower-cases, strips diacritics, drops apostrophes (o'brien -> obrien),
    splits on every other character outside [a-z0-9] and keeps hyphens only
    inside a token (wi-fi stays whole, -vpn- becomes vpn). No stemming and no
    stop-word removal: queries are short and every word counts.

    Args:
        raw: Query or candidate text; None is treated as empty.

    Returns:
        Tokens in their original order (may be empty).
    """
    if not raw:
        return []
    text = _strip_diacritics(raw).lower()
    text = _APOSTROPHES.sub("", text)
    tokens: list[str] = []
    for piece in _SEPARATORS.split(text):
        token = piece.strip("-")
        if token:
            tokens.append(token)
    return tokens


def normalize_text(raw: str | None) -> str:
    """Return normalize(raw) joined by single spaces (used for substring tests)."""
    return " ".join(normalize(raw))

"""Application services: tokenizing, fuzzy matching, scope resolution, text extraction."""

from app.application.services.fuzzy_matcher import FuzzyMatcher
from app.application.services.scope_resolver import ScopeResolver
from app.application.services.text_extraction import extract_content_text, extract_snippet
from app.application.services.tokenizer import normalize, normalize_text

__all__ = [
    "FuzzyMatcher",
    "ScopeResolver",
    "extract_content_text",
    "extract_snippet",
    "normalize",
    "normalize_text",
]

"""Approximate string matching shared by every source adapter.

Scores how well a tokenized query matches a candidate field. All similarity
heuristics live here; adapters only decide which fields to score and how to
weight them.
"""

from __future__ import annotations

from collections.abc import Sequence

from rapidfuzz.distance import DamerauLevenshtein

from app.application.services.tokenizer import normalize, normalize_text

DEFAULT_FLOOR = 0.55
DEFAULT_PREFIX_BONUS = 0.5
# The prefix bonus only applies to query tokens at least this long.
MIN_PREFIX_BONUS_LENGTH = 3
# Candidate text beyond this many characters is not scored.
MAX_CANDIDATE_CHARS = 5000


class FuzzyMatcher:
    """Typo- and prefix-tolerant similarity between query tokens and text.

    For each query token the best similarity over the candidate's distinct
    words is taken: normalized Damerau-Levenshtein similarity (edit distance
    divided by the longer word's length) plus a flat bonus when the word
    starts with the token. Tokens below the floor contribute zero. Token
    scores are averaged weighted by token length, so short noisy tokens
    count for less.
    """

    def __init__(
        self,
        floor: float = DEFAULT_FLOOR,
        prefix_bonus: float = DEFAULT_PREFIX_BONUS,
        min_prefix_length: int = MIN_PREFIX_BONUS_LENGTH,
        max_candidate_chars: int = MAX_CANDIDATE_CHARS,
    ) -> None:
        self.floor = floor
        self.prefix_bonus = prefix_bonus
        self.min_prefix_length = min_prefix_length
        self.max_candidate_chars = max_candidate_chars

    def candidate_words(self, candidate_text: str | None) -> set[str]:
        """Distinct normalized words of candidate_text (truncated to max_candidate_chars)."""
        if not candidate_text:
            return set()
        return set(normalize(candidate_text[: self.max_candidate_chars]))

    def token_similarity(self, token: str, word: str) -> float:
        """Similarity of one query token to one candidate word, in [0, 1]."""
        if token == word:
            return 1.0
        is_prefix = len(token) >= self.min_prefix_length and word.startswith(token)
        if not is_prefix:
            # Edit distance is at least the length difference; skip hopeless pairs.
            shorter, longer = sorted((len(token), len(word)))
            if longer == 0 or shorter / longer < self.floor:
                return 0.0
        similarity = DamerauLevenshtein.normalized_similarity(token, word)
        if is_prefix:
            similarity = min(1.0, similarity + self.prefix_bonus)
        return similarity

    def best_token_score(self, token: str, words: set[str]) -> tuple[float, str | None]:
        """Best similarity of token over words and the word that achieved it.

        Scores below the floor are reported as (0.0, None).
        """
        best = 0.0
        best_word: str | None = None
        for word in words:
            similarity = self.token_similarity(token, word)
            if similarity > best or (similarity == best and best_word is not None and word < best_word):
                best, best_word = similarity, word
                if best == 1.0 and word == token:
                    break
        if best < self.floor:
            return 0.0, None
        return best, best_word

    def score(
        self,
        query_tokens: Sequence[str],
        candidate_text: str | None,
        *,
        exact: bool = False,
    ) -> float:
        """Score candidate_text against query_tokens in [0, 1].

        Args:
            query_tokens: Output of normalize() for the query.
            candidate_text: Raw field text (None or empty scores 0).
            exact: When True, fuzzy matching is bypassed: 1.0 if the
                normalized query is a substring of the normalized candidate,
                else 0.0.

        Returns:
            Similarity score; 0.0 means "no match".
        """
        if not query_tokens or not candidate_text:
            return 0.0
        if exact:
            needle = " ".join(query_tokens)
            haystack = normalize_text(candidate_text[: self.max_candidate_chars])
            return 1.0 if needle in haystack else 0.0
        words = self.candidate_words(candidate_text)
        if not words:
            return 0.0
        weighted = 0.0
        total_weight = 0
        for token in query_tokens:
            token_score, _ = self.best_token_score(token, words)
            weighted += token_score * len(token)
            total_weight += len(token)
        if total_weight == 0:
            return 0.0
        return weighted / total_weight

    def matching_words(
        self,
        query_tokens: Sequence[str],
        candidate_text: str | None,
        *,
        exact: bool = False,
    ) -> list[str]:
        """Candidate words that matched a query token (in query token order).

        Used to anchor snippets; exact mode returns the query tokens themselves
        when the phrase occurs in the candidate.
        """
        if not query_tokens or not candidate_text:
            return []
        if exact:
            return list(query_tokens) if self.score(query_tokens, candidate_text, exact=True) else []
        words = self.candidate_words(candidate_text)
        matched: list[str] = []
        for token in query_tokens:
            _, word = self.best_token_score(token, words)
            if word is not None and word not in matched:
                matched.append(word)
        return matched

"""Blended lexical similarity between two bags of meaningful words.

The blended score adds four contributions and normalizes by the longer bag:

* exact: words of the first bag that also occur in the second;
* partial: per differing word pair, a substring bonus plus a fuzzy bonus for
  near spellings (Levenshtein distance gate);
* synonym: per differing word pair sharing a synonym group;
* field: per topical field, a bonus scaled by the smaller hit count.
"""


from dataclasses import dataclass
from typing import Sequence

from rapidfuzz.distance import Levenshtein

from repeat_lens.analysis import round_half_up, tokenize_words

from .lexicon import SEMANTIC_FIELDS, SYNONYM_GROUPS


@dataclass(frozen=True)
class ScoringWeights:
    """Bonus weights and gates for the blended similarity score."""

    substring_bonus: float = 0.5
    fuzzy_bonus: float = 0.3
    fuzzy_max_distance: int = 2
    fuzzy_min_chars: int = 4
    synonym_bonus: float = 0.8
    field_bonus: float = 0.4


DEFAULT_WEIGHTS = ScoringWeights()


@dataclass(frozen=True)
class SimilarityBreakdown:
    """Per-strategy contributions that make up one blended score."""

    exact: float
    partial: float
    synonym: float
    field: float
    basis: int

    @property
    def total(self) -> float:
        return self.exact + self.partial + self.synonym + self.field

    @property
    def score(self) -> int:
        """Return the 0-100 score derived from the summed contributions."""
        if self.basis == 0:
            return 0
        return min(100, round_half_up(self.total / self.basis * 100))


def levenshtein_distance(first: str, second: str) -> int:
    """Return the unit-cost edit distance between two strings."""
    return Levenshtein.distance(first, second)


def exact_overlap(words1: Sequence[str], words2: Sequence[str]) -> int:
    """Count words of ``words1`` (with multiplicity) present in ``words2``."""
    present = set(words2)
    return sum(1 for word in words1 if word in present)


def partial_overlap(
    words1: Sequence[str],
    words2: Sequence[str],
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """Score substring containment and near spellings across differing pairs."""
    total = 0.0
    for word1 in words1:
        for word2 in words2:
            if word1 == word2:
                continue
            if word1 in word2 or word2 in word1:
                total += weights.substring_bonus
            if (
                min(len(word1), len(word2)) > weights.fuzzy_min_chars
                and levenshtein_distance(word1, word2) <= weights.fuzzy_max_distance
            ):
                total += weights.fuzzy_bonus
    return total


def synonym_overlap(
    words1: Sequence[str],
    words2: Sequence[str],
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """Add a bonus for every differing pair per synonym group holding both."""
    total = 0.0
    for word1 in words1:
        for word2 in words2:
            if word1 == word2:
                continue
            for group in SYNONYM_GROUPS:
                if word1 in group and word2 in group:
                    total += weights.synonym_bonus
    return total


def field_overlap(
    words1: Sequence[str],
    words2: Sequence[str],
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """Reward both bags drawing vocabulary from the same topical field."""
    total = 0.0
    for field_words in SEMANTIC_FIELDS.values():
        hits1 = sum(1 for word in words1 if word in field_words)
        hits2 = sum(1 for word in words2 if word in field_words)
        if hits1 > 0 and hits2 > 0:
            total += min(hits1, hits2) * weights.field_bonus
    return total


def similarity_breakdown(
    words1: Sequence[str],
    words2: Sequence[str],
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> SimilarityBreakdown:
    """Compute every contribution of the blended score."""
    if not words1 or not words2:
        return SimilarityBreakdown(exact=0, partial=0.0, synonym=0.0, field=0.0, basis=0)
    return SimilarityBreakdown(
        exact=exact_overlap(words1, words2),
        partial=partial_overlap(words1, words2, weights),
        synonym=synonym_overlap(words1, words2, weights),
        field=field_overlap(words1, words2, weights),
        basis=max(len(words1), len(words2)),
    )


def blended_similarity(
    words1: Sequence[str],
    words2: Sequence[str],
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> int:
    """Return the blended 0-100 similarity of two meaningful-word bags."""
    return similarity_breakdown(words1, words2, weights).score


def matched_words(words1: Sequence[str], words2: Sequence[str]) -> tuple[str, ...]:
    """Return the words of ``words1`` found verbatim in ``words2``."""
    present = set(words2)
    return tuple(word for word in words1 if word in present)


def word_overlap_similarity(text1: str, text2: str) -> int:
    """Percentage of shared words longer than 3 chars over the longer text."""
    words1 = [word for word in text1.lower().split() if len(word) > 3]
    words2 = [word for word in text2.lower().split() if len(word) > 3]
    if not words1 or not words2:
        return 0
    return round_half_up(exact_overlap(words1, words2) / max(len(words1), len(words2)) * 100)


def jaccard_similarity(text1: str, text2: str) -> float:
    """Jaccard percentage of the word sets (tokens longer than 2 chars)."""
    set1 = {word for word in tokenize_words(text1, lowercase=True) if len(word) > 2}
    set2 = {word for word in tokenize_words(text2, lowercase=True) if len(word) > 2}
    if not set1 or not set2:
        return 0.0
    return len(set1 & set2) / len(set1 | set2) * 100

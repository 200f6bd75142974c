"""Shared helper functions used by multiple detector modules."""


import re
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from typing import TypeAlias

from repeat_lens.analysis import (
    AnalysisOptions,
    DetectionLevel,
    RankingPolicy,
    Repetition,
    WindowPolicy,
    compute_severity,
    tokenize_words,
    truncate_text,
)

GroupKey: TypeAlias = Hashable

_PUNCTUATION_RE = re.compile(r"[^\w\s]")
_WHITESPACE_RE = re.compile(r"\s+")

COMMON_WORDS = frozenset(
    {
        "the",
        "and",
        "for",
        "are",
        "but",
        "not",
        "you",
        "all",
        "can",
        "had",
        "her",
        "was",
        "one",
        "our",
        "out",
        "day",
        "get",
        "has",
        "him",
        "his",
        "how",
        "its",
        "may",
        "new",
        "now",
        "old",
        "see",
        "two",
        "who",
        "boy",
        "did",
        "she",
        "use",
        "way",
        "will",
        "with",
        "have",
        "this",
        "that",
        "from",
        "they",
        "know",
        "want",
        "been",
        "good",
        "much",
        "some",
        "time",
        "very",
        "when",
        "come",
        "here",
        "just",
        "like",
        "long",
        "make",
        "many",
        "over",
        "such",
        "take",
        "than",
        "them",
        "well",
        "were",
        "what",
        "your",
    }
)

COMMON_PHRASES: tuple[str, ...] = (
    "in the",
    "of the",
    "to the",
    "and the",
    "for the",
    "on the",
    "at the",
    "by the",
    "with the",
    "from the",
    "this is",
    "that is",
    "it is",
    "there is",
    "there are",
    "you can",
    "we can",
    "i can",
    "will be",
    "would be",
    "could be",
    "should be",
    "have been",
    "has been",
)


def strip_punctuation(text: str) -> str:
    """Remove every character that is neither a word character nor whitespace."""
    return _PUNCTUATION_RE.sub("", text)


def is_punctuation(char: str) -> bool:
    """Return whether a single character is dropped by ``strip_punctuation``."""
    return _PUNCTUATION_RE.match(char) is not None


def normalize_text(text: str, options: AnalysisOptions) -> str:
    """Apply case folding, punctuation stripping, and whitespace collapsing."""
    normalized = text
    if options.ignore_case:
        normalized = normalized.lower()
    if options.ignore_punctuation:
        normalized = strip_punctuation(normalized)
    return _WHITESPACE_RE.sub(" ", normalized).strip()


def is_common_word(word: str) -> bool:
    return word.lower() in COMMON_WORDS


def is_common_phrase(phrase: str) -> bool:
    """Return whether ``phrase`` contains any stoplisted short phrase."""
    lowered = phrase.lower()
    return any(common in lowered for common in COMMON_PHRASES)


def is_common_sequence(sequence: str) -> bool:
    """Return whether a word sequence is too short or made of common words."""
    words = sequence.split(" ")
    return len(words) < 3 or all(is_common_word(word) for word in words)


def meaningful_words(text: str) -> list[str]:
    """Return lowercased tokens longer than 3 chars that are not common words."""
    return [
        word
        for word in tokenize_words(text, lowercase=True)
        if len(word) > 3 and word not in COMMON_WORDS
    ]


def max_window_length(
    level: DetectionLevel, token_count: int, policy: WindowPolicy
) -> int:
    """Return the largest window length enumerated for a token-window level."""
    if level is DetectionLevel.PHRASE:
        if policy is WindowPolicy.ENHANCED:
            return min(15, token_count // 10)
        return min(10, token_count)
    if level is DetectionLevel.WORD:
        if policy is WindowPolicy.ENHANCED:
            return min(25, token_count // 5)
        return min(20, token_count)
    raise ValueError(f"level {level} does not enumerate token windows")


def iter_windows(
    tokens: list[str], min_length: int, max_length: int
) -> Iterable[tuple[int, int, str]]:
    """Yield ``(length, start, phrase)`` for every window, shortest first."""
    for length in range(min_length, max_length + 1):
        for start in range(len(tokens) - length + 1):
            yield length, start, " ".join(tokens[start : start + length])


@dataclass
class SpanGroup:
    """Occurrences collected for one normalized key."""

    full_text: str
    indices: list[int] = field(default_factory=list)
    paragraph_count: int | None = None
    word_count: int | None = None


class SpanGroups:
    """Insertion-ordered accumulator mapping group keys to occurrences."""

    def __init__(self) -> None:
        self._groups: dict[GroupKey, SpanGroup] = {}

    def add(
        self,
        key: GroupKey,
        index: int,
        full_text: str,
        *,
        paragraph_count: int | None = None,
        word_count: int | None = None,
    ) -> None:
        """Record one occurrence; the first occurrence fixes the display text."""
        group = self._groups.get(key)
        if group is None:
            group = SpanGroup(
                full_text=full_text,
                paragraph_count=paragraph_count,
                word_count=word_count,
            )
            self._groups[key] = group
        group.indices.append(index)

    def replace(self, key: GroupKey, group: SpanGroup) -> None:
        self._groups[key] = group

    def repeated(self, min_count: int = 2) -> list[SpanGroup]:
        """Return groups with at least ``min_count`` occurrences in discovery order."""
        return [group for group in self._groups.values() if len(group.indices) >= min_count]


def build_repetitions(
    groups: list[SpanGroup],
    level: DetectionLevel,
    options: AnalysisOptions,
    display_chars: int,
) -> list[Repetition]:
    """Materialize span groups as ranked ``Repetition`` records."""
    with_severity = options.ranking is RankingPolicy.SEVERITY
    ranked: list[tuple[SpanGroup, int | None]] = [
        (
            group,
            compute_severity(len(group.indices), len(group.full_text))
            if with_severity
            else None,
        )
        for group in groups
    ]
    if with_severity:
        ranked.sort(key=lambda item: -(item[1] or 0))
    else:
        ranked.sort(key=lambda item: -len(item[0].indices))

    return [
        Repetition(
            id=f"{level.value}-{rank}",
            text=truncate_text(group.full_text, display_chars),
            full_text=group.full_text,
            count=len(group.indices),
            level=level,
            indices=tuple(group.indices),
            paragraph_count=group.paragraph_count,
            word_count=group.word_count,
            severity=severity,
        )
        for rank, (group, severity) in enumerate(ranked)
    ]

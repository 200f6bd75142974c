"""Core analysis models, tokenizers, and scoring helpers for repeat-lens."""


import math
import re
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeAlias

RepetitionPayload: TypeAlias = dict[str, object]
MatchPayload: TypeAlias = dict[str, object]


class InvalidConfigurationError(ValueError):
    """Raised when a caller passes options outside their defined ranges."""


class DetectionLevel(StrEnum):
    """Granularity at which repeated content is detected."""

    PARAGRAPH = "paragraph"
    SENTENCE = "sentence"
    PHRASE = "phrase"
    WORD = "word"


class RankingPolicy(StrEnum):
    """Ordering contract for scan output."""

    SEVERITY = "severity"
    COUNT = "count"


class WindowPolicy(StrEnum):
    """Maximum window length formula for phrase and word-sequence scans."""

    SIMPLE = "simple"
    ENHANCED = "enhanced"


def parse_level(level: "DetectionLevel | str") -> DetectionLevel:
    """Coerce a level name into ``DetectionLevel`` or fail fast."""
    try:
        return DetectionLevel(level)
    except ValueError as exc:
        known = ", ".join(item.value for item in DetectionLevel)
        raise InvalidConfigurationError(
            f"Unknown detection level {level!r}. Known levels: {known}"
        ) from exc


@dataclass(frozen=True)
class AnalysisOptions:
    """Per-call knobs shared by the scanner and the similarity engine."""

    min_length: int = 3
    similarity_threshold: int = 80
    ignore_case: bool = True
    ignore_punctuation: bool = False
    semantic_similarity: bool = False
    ranking: RankingPolicy = RankingPolicy.SEVERITY
    window_policy: WindowPolicy = WindowPolicy.SIMPLE
    semantic_match_limit: int = 8

    def __post_init__(self) -> None:
        if isinstance(self.min_length, bool) or not isinstance(self.min_length, int):
            raise InvalidConfigurationError("min_length must be an integer")
        if self.min_length < 1:
            raise InvalidConfigurationError(
                f"min_length must be >= 1, got {self.min_length}"
            )
        if not 0 <= self.similarity_threshold <= 100:
            raise InvalidConfigurationError(
                "similarity_threshold must be in [0, 100], "
                f"got {self.similarity_threshold}"
            )
        if self.semantic_match_limit < 1:
            raise InvalidConfigurationError("semantic_match_limit must be >= 1")
        try:
            object.__setattr__(self, "ranking", RankingPolicy(self.ranking))
            object.__setattr__(self, "window_policy", WindowPolicy(self.window_policy))
        except ValueError as exc:
            raise InvalidConfigurationError(str(exc)) from exc


DEFAULT_OPTIONS = AnalysisOptions()


@dataclass(frozen=True)
class TextRange:
    """Character range of a selection inside the full text."""

    index: int
    length: int

    def __post_init__(self) -> None:
        if self.index < 0 or self.length < 0:
            raise InvalidConfigurationError(
                f"range index and length must be non-negative, got {self}"
            )

    @property
    def end(self) -> int:
        return self.index + self.length

    def overlaps(self, start: int, end: int) -> bool:
        """Return whether ``[start, end)`` intersects this range."""
        return start < self.end and self.index < end


@dataclass(frozen=True)
class Repetition:
    """One group of repeated spans found at a single detection level."""

    id: str
    text: str
    full_text: str
    count: int
    level: DetectionLevel
    indices: tuple[int, ...]
    paragraph_count: int | None = None
    word_count: int | None = None
    severity: int | None = None

    def to_payload(self) -> RepetitionPayload:
        """Serialize a repetition group for tool output."""
        payload: RepetitionPayload = {
            "id": self.id,
            "text": self.text,
            "full_text": self.full_text,
            "count": self.count,
            "level": self.level.value,
            "indices": list(self.indices),
        }
        if self.paragraph_count is not None:
            payload["paragraph_count"] = self.paragraph_count
        if self.word_count is not None:
            payload["word_count"] = self.word_count
        if self.severity is not None:
            payload["severity"] = self.severity
        return payload


@dataclass(frozen=True)
class MatchInfo:
    """One occurrence found while comparing a selection to the full text."""

    index: int
    text: str
    context: str
    similarity: int
    is_semantic: bool = False
    matched_words: tuple[str, ...] = ()

    def to_payload(self) -> MatchPayload:
        """Serialize a match for tool output."""
        return {
            "index": self.index,
            "text": self.text,
            "context": self.context,
            "similarity": self.similarity,
            "is_semantic": self.is_semantic,
            "matched_words": list(self.matched_words),
        }


@dataclass(frozen=True)
class Statistics:
    """Aggregate counts derived from one scan."""

    word_count: int = 0
    repetition_count: int = 0
    instance_count: int = 0
    efficiency_score: int = 100
    unique_words: int = 0
    average_severity: int = 0

    def to_payload(self) -> dict[str, int]:
        return {
            "word_count": self.word_count,
            "repetition_count": self.repetition_count,
            "instance_count": self.instance_count,
            "efficiency_score": self.efficiency_score,
            "unique_words": self.unique_words,
            "average_severity": self.average_severity,
        }


@dataclass(frozen=True)
class ScanResult:
    """Ranked repetition groups plus statistics for one scan."""

    level: DetectionLevel
    repetitions: tuple[Repetition, ...] = ()
    stats: Statistics = field(default_factory=Statistics)

    def to_payload(self) -> dict[str, object]:
        return {
            "level": self.level.value,
            "repetitions": [item.to_payload() for item in self.repetitions],
            "stats": self.stats.to_payload(),
        }


# ---------------------------------------------------------------------------
# Tokenization
# ---------------------------------------------------------------------------

_PARAGRAPH_SPLIT_RE = re.compile(
    r"\n\s*\n|</p>\s*<p[^>]*>|</p>\s*<br\s*/?>\s*<p[^>]*>",
    re.IGNORECASE,
)
_TAG_RE = re.compile(r"<[^>]*>")
_SENTENCE_RE = re.compile(r"[^.!?]+[.!?]+")
_WORD_RE = re.compile(r"\b\w+\b")


@dataclass(frozen=True)
class Sentence:
    """A terminated sentence with its raw span in the source text."""

    raw: str
    start: int
    end: int

    @property
    def text(self) -> str:
        return self.raw.strip()

    @property
    def trimmed_start(self) -> int:
        """Offset of the first non-whitespace character of the sentence."""
        return self.start + (len(self.raw) - len(self.raw.lstrip()))


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines or paragraph tags and strip inline markup."""
    paragraphs = (_TAG_RE.sub("", chunk).strip() for chunk in _PARAGRAPH_SPLIT_RE.split(text))
    return [paragraph for paragraph in paragraphs if paragraph]


def split_sentences(text: str) -> list[Sentence]:
    """Return terminated sentences; a trailing unterminated clause is dropped."""
    return [
        Sentence(raw=match.group(0), start=match.start(), end=match.end())
        for match in _SENTENCE_RE.finditer(text)
    ]


def tokenize_words(text: str, *, lowercase: bool = False) -> list[str]:
    """Extract maximal runs of word characters."""
    words = _WORD_RE.findall(text)
    if lowercase:
        return [word.lower() for word in words]
    return words


def word_count(text: str) -> int:
    """Return the number of word-character tokens in a text blob."""
    return len(_WORD_RE.findall(text))


@dataclass(frozen=True)
class AnalysisDocument:
    """Precomputed text views consumed by detectors."""

    text: str
    paragraphs: tuple[str, ...]
    sentences: tuple[Sentence, ...]
    words: tuple[str, ...]

    @classmethod
    def from_text(cls, text: str) -> "AnalysisDocument":
        """Build a document with paragraph/sentence/word projections."""
        return cls(
            text=text,
            paragraphs=tuple(split_paragraphs(text)),
            sentences=tuple(split_sentences(text)),
            words=tuple(tokenize_words(text)),
        )

    def tokens(self, options: AnalysisOptions) -> list[str]:
        """Return word tokens with case folded according to ``options``."""
        if options.ignore_case:
            return [word.lower() for word in self.words]
        return list(self.words)


# ---------------------------------------------------------------------------
# Scoring helpers
# ---------------------------------------------------------------------------


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties going up."""
    return int(math.floor(value + 0.5))


def compute_severity(count: int, text_length: int) -> int:
    """Combine occurrence count and matched-text length into a ranking score."""
    count_factor = min(count / 5, 3)
    length_factor = min(text_length / 100, 2)
    return round_half_up(count_factor * length_factor * 100)


def truncate_text(text: str, max_length: int) -> str:
    """Cut ``text`` to ``max_length`` characters and mark the cut."""
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def context_around(text: str, start: int, length: int, padding: int) -> str:
    """Extract the matched span plus ``padding`` characters on each side."""
    ctx_start = max(0, start - padding)
    ctx_end = min(len(text), start + length + padding)
    prefix = "..." if ctx_start > 0 else ""
    suffix = "..." if ctx_end < len(text) else ""
    return f"{prefix}{text[ctx_start:ctx_end]}{suffix}"


def compute_statistics(
    text: str, repetitions: "tuple[Repetition, ...] | list[Repetition]"
) -> Statistics:
    """Derive aggregate counts and the efficiency score from scan output."""
    words = word_count(text)
    instances = sum(repetition.count for repetition in repetitions)
    unique_words = max(0, words - instances)
    if words == 0:
        efficiency = 100
    else:
        efficiency = max(0, min(100, round_half_up(unique_words / words * 100)))

    severities = [
        repetition.severity for repetition in repetitions if repetition.severity is not None
    ]
    average_severity = (
        round_half_up(sum(severities) / len(repetitions)) if severities else 0
    )
    return Statistics(
        word_count=words,
        repetition_count=len(repetitions),
        instance_count=instances,
        efficiency_score=efficiency,
        unique_words=unique_words,
        average_severity=average_severity,
    )

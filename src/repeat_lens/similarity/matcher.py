"""Find exact and approximate occurrences of a selected span in a document."""


import logging
import re
from dataclasses import dataclass

from repeat_lens.analysis import (
    AnalysisOptions,
    DEFAULT_OPTIONS,
    DetectionLevel,
    MatchInfo,
    TextRange,
    context_around,
    split_sentences,
    tokenize_words,
)
from repeat_lens.detectors.helpers import is_punctuation, meaningful_words, strip_punctuation

from .scoring import blended_similarity, matched_words

logger = logging.getLogger(__name__)

EXACT_CONTEXT_CHARS = 30
SEMANTIC_CONTEXT_CHARS = 60

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class SelectionAnalysis:
    """Summary of one selection compared against its full text."""

    selected_text: str
    level: DetectionLevel
    word_count: int
    char_count: int
    exact_matches: tuple[MatchInfo, ...]
    semantic_matches: tuple[MatchInfo, ...]

    @property
    def matches(self) -> tuple[MatchInfo, ...]:
        return self.exact_matches + self.semantic_matches

    def to_payload(self) -> dict[str, object]:
        return {
            "selected_text": self.selected_text,
            "level": self.level.value,
            "word_count": self.word_count,
            "char_count": self.char_count,
            "matches": [match.to_payload() for match in self.matches],
            "exact_match_count": len(self.exact_matches),
            "semantic_match_count": len(self.semantic_matches),
        }


def map_to_original_index(
    original: str, processed_index: int, *, ignore_punctuation: bool
) -> int:
    """Translate an offset in punctuation-stripped text back to ``original``.

    Returns ``len(original)`` when the offset lies past the last retained
    character.
    """
    if not ignore_punctuation:
        return min(processed_index, len(original))
    retained = 0
    for position, char in enumerate(original):
        if is_punctuation(char):
            continue
        if retained == processed_index:
            return position
        retained += 1
    return len(original)


def _map_end(original: str, processed_end: int, *, ignore_punctuation: bool) -> int:
    """Translate an exclusive end offset; the span ends after its last kept char."""
    if processed_end <= 0:
        return 0
    last = map_to_original_index(
        original, processed_end - 1, ignore_punctuation=ignore_punctuation
    )
    return min(last + 1, len(original))


def _compile_selection(
    selected_text: str, full_text: str, options: AnalysisOptions
) -> tuple[re.Pattern[str] | None, str]:
    """Return the search pattern and the haystack it runs over."""
    needle = selected_text
    haystack = full_text
    if options.ignore_punctuation:
        needle = strip_punctuation(needle)
        haystack = strip_punctuation(haystack)
    if not needle:
        return None, haystack
    flags = re.IGNORECASE if options.ignore_case else 0
    return re.compile(re.escape(needle), flags), haystack


def locate_selection(
    selected_text: str,
    full_text: str,
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> TextRange:
    """Return the range of the first occurrence, compared as the matcher compares.

    An absent selection gets an empty range at the end of the text, which no
    match can start at.
    """
    pattern, haystack = _compile_selection(selected_text, full_text, options)
    found = pattern.search(haystack) if pattern is not None else None
    if found is None:
        return TextRange(index=len(full_text), length=0)
    start = map_to_original_index(
        full_text, found.start(), ignore_punctuation=options.ignore_punctuation
    )
    end = _map_end(full_text, found.end(), ignore_punctuation=options.ignore_punctuation)
    return TextRange(index=start, length=end - start)


def _selection_start(
    full_text: str, text_range: TextRange, options: AnalysisOptions
) -> int:
    """Return where the selection's own match lands after punctuation is dropped."""
    start = text_range.index
    if options.ignore_punctuation:
        while (
            start < min(text_range.end, len(full_text))
            and is_punctuation(full_text[start])
        ):
            start += 1
    return start


def find_exact_matches(
    selected_text: str,
    full_text: str,
    text_range: TextRange,
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> list[MatchInfo]:
    """Find literal occurrences of the selection other than the selection itself."""
    pattern, haystack = _compile_selection(selected_text, full_text, options)
    if pattern is None:
        return []

    # Leading punctuation in the selection shifts its mapped start forward.
    own_starts = {text_range.index, _selection_start(full_text, text_range, options)}
    matches: list[MatchInfo] = []
    for found in pattern.finditer(haystack):
        start = map_to_original_index(
            full_text, found.start(), ignore_punctuation=options.ignore_punctuation
        )
        if start in own_starts:
            continue
        end = _map_end(full_text, found.end(), ignore_punctuation=options.ignore_punctuation)
        literal = full_text[start:end]
        matches.append(
            MatchInfo(
                index=start,
                text=literal,
                context=context_around(full_text, start, len(literal), EXACT_CONTEXT_CHARS),
                similarity=100,
                is_semantic=False,
            )
        )
    return matches


def find_semantic_matches(
    selected_text: str,
    full_text: str,
    text_range: TextRange,
    options: AnalysisOptions = DEFAULT_OPTIONS,
) -> list[MatchInfo]:
    """Score every sentence outside the selection and keep the closest ones."""
    selected_words = meaningful_words(selected_text)
    if not selected_words:
        return []

    matches: list[MatchInfo] = []
    for sentence in split_sentences(full_text):
        text = sentence.text
        start = sentence.trimmed_start
        if text_range.overlaps(start, start + len(text)):
            continue

        sentence_words = meaningful_words(sentence.raw)
        similarity = blended_similarity(selected_words, sentence_words)
        if similarity < options.similarity_threshold:
            continue
        matches.append(
            MatchInfo(
                index=start,
                text=text,
                context=context_around(full_text, start, len(text), SEMANTIC_CONTEXT_CHARS),
                similarity=similarity,
                is_semantic=True,
                matched_words=matched_words(selected_words, sentence_words),
            )
        )

    matches.sort(key=lambda match: -match.similarity)
    return matches[: options.semantic_match_limit]


def find_matches(
    selected_text: str,
    full_text: str,
    text_range: TextRange,
    options: AnalysisOptions | None = None,
) -> list[MatchInfo]:
    """Return exact matches followed by semantic matches when enabled."""
    active_options = DEFAULT_OPTIONS if options is None else options
    exact = find_exact_matches(selected_text, full_text, text_range, active_options)
    semantic: list[MatchInfo] = []
    if active_options.semantic_similarity:
        semantic = find_semantic_matches(
            selected_text, full_text, text_range, active_options
        )
    logger.debug(
        "find_matches selection_chars=%d exact=%d semantic=%d",
        len(selected_text),
        len(exact),
        len(semantic),
    )
    return exact + semantic


def determine_selection_level(text: str) -> DetectionLevel:
    """Guess which detection level a selection corresponds to."""
    blocks = [block for block in _BLOCK_SPLIT_RE.split(text) if block.strip()]
    if len(blocks) > 1:
        return DetectionLevel.PARAGRAPH
    if split_sentences(text):
        return DetectionLevel.SENTENCE
    if len(tokenize_words(text)) > 5:
        return DetectionLevel.PHRASE
    return DetectionLevel.WORD


def analyze_selection(
    selected_text: str,
    full_text: str,
    text_range: TextRange,
    options: AnalysisOptions | None = None,
) -> SelectionAnalysis:
    """Compare a selection to its document and summarize the result."""
    active_options = DEFAULT_OPTIONS if options is None else options
    matches = find_matches(selected_text, full_text, text_range, active_options)
    return SelectionAnalysis(
        selected_text=selected_text,
        level=determine_selection_level(selected_text),
        word_count=len(selected_text.split()),
        char_count=len(selected_text),
        exact_matches=tuple(match for match in matches if not match.is_semantic),
        semantic_matches=tuple(match for match in matches if match.is_semantic),
    )

"""Detect repeated word sequences and, at ``min_length == 1``, overused words.

Objective: Catch long copied runs of words (up to 20 or 25 tokens depending on
the window policy) and, when single words are requested, content words that
show up more than twice.

Example Repetitions:
    - "we deploy with canary rollout we deploy with canary rollout"
      Three- to five-word sequences recur.

Example Non-Repetitions:
    - "the and for the and for"
      Sequences made only of common words are discarded.

Severity: grows with both the count and the sequence length, so long copied
runs outrank a frequently repeated three-word sequence.
"""


from dataclasses import dataclass

from repeat_lens.analysis import (
    AnalysisDocument,
    AnalysisOptions,
    DetectionLevel,
    Repetition,
)

from repeat_lens.detectors.base import Detector, DetectorConfig
from repeat_lens.detectors.helpers import (
    SpanGroup,
    SpanGroups,
    build_repetitions,
    is_common_sequence,
    is_common_word,
    iter_windows,
    max_window_length,
)


@dataclass
class WordSequenceDetectorConfig(DetectorConfig):
    """Config for word-sequence filtering and single-word frequency counts."""

    min_chars: int
    single_word_min_chars: int
    single_word_min_count: int
    display_chars: int


class WordSequenceDetector(Detector[WordSequenceDetectorConfig]):
    """Group repeated word sequences and frequent single content words."""

    name = "word_sequence"
    level = DetectionLevel.WORD

    def example_repetitions(self) -> list[str]:
        """Return samples that should produce word-sequence groups."""
        return [
            "we deploy with canary rollout we deploy with canary rollout",
            (
                "Customers asked for faster exports. Support said customers asked "
                "for faster exports again."
            ),
        ]

    def example_non_repetitions(self) -> list[str]:
        """Return samples that should produce no word-sequence groups."""
        return [
            "Each paragraph expresses a related idea with different wording.",
            "the and for the and for",
        ]

    def forward(
        self, document: AnalysisDocument, options: AnalysisOptions
    ) -> list[Repetition]:
        tokens = document.tokens(options)
        max_length = max_window_length(self.level, len(tokens), options.window_policy)
        groups = SpanGroups()
        for length, start, sequence in iter_windows(tokens, options.min_length, max_length):
            if len(sequence) <= self.config.min_chars or is_common_sequence(sequence):
                continue
            groups.add(sequence, start, sequence, word_count=length)

        if options.min_length == 1:
            for word, indices in self._frequent_words(tokens).items():
                groups.replace(
                    word, SpanGroup(full_text=word, indices=indices, word_count=1)
                )

        return build_repetitions(
            groups.repeated(), self.level, options, self.config.display_chars
        )

    def _frequent_words(self, tokens: list[str]) -> dict[str, list[int]]:
        """Return content words seen at least ``single_word_min_count`` times."""
        positions: dict[str, list[int]] = {}
        for index, word in enumerate(tokens):
            if len(word) > self.config.single_word_min_chars and not is_common_word(word):
                positions.setdefault(word, []).append(index)
        return {
            word: indices
            for word, indices in positions.items()
            if len(indices) >= self.config.single_word_min_count
        }

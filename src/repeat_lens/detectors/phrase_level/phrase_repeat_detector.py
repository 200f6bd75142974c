"""Detect repeated multi-word phrases with a sliding token window.

Objective: Find short phrases (``min_length`` words and up) that recur anywhere
in the text. Windows of different lengths are independent groups, so a
repeated five-word run also reports its repeated four-word pieces unless those
are filtered out.

Example Repetitions:
    - "I am so sad today, but now I am so sad again."
      "i am so sad" recurs; its three-word pieces are too short to count.

Example Non-Repetitions:
    - "in the morning and in the morning"
      Every repeated window contains the stoplisted phrase "in the".
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
    SpanGroups,
    build_repetitions,
    is_common_phrase,
    iter_windows,
    max_window_length,
)


@dataclass
class PhraseRepeatDetectorConfig(DetectorConfig):
    """Config for phrase window filtering and display."""

    min_chars: int
    display_chars: int


class PhraseRepeatDetector(Detector[PhraseRepeatDetectorConfig]):
    """Group identical token windows keyed by their joined text."""

    name = "phrase_repeat"
    level = DetectionLevel.PHRASE

    def example_repetitions(self) -> list[str]:
        """Return samples that should produce phrase groups."""
        return [
            "I am so sad today, but now I am so sad again.",
            "red blue green yellow red blue green yellow",
        ]

    def example_non_repetitions(self) -> list[str]:
        """Return samples that should produce no phrase groups."""
        return [
            "Each paragraph expresses a related idea with different wording.",
            "in the morning and in the morning",
        ]

    def forward(
        self, document: AnalysisDocument, options: AnalysisOptions
    ) -> list[Repetition]:
        tokens = document.tokens(options)
        max_length = max_window_length(self.level, len(tokens), options.window_policy)
        groups = SpanGroups()
        for length, start, phrase in iter_windows(tokens, options.min_length, max_length):
            if len(phrase) <= self.config.min_chars or is_common_phrase(phrase):
                continue
            groups.add(phrase, start, phrase, word_count=length)

        return build_repetitions(
            groups.repeated(), self.level, options, self.config.display_chars
        )

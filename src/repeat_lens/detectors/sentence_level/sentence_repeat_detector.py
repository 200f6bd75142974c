"""Detect sentences that recur verbatim after normalization.

Example Repetitions:
    - "The cat sat on the mat. The cat sat on the mat."
      Same clause restated back to back.

Example Non-Repetitions:
    - "Go now. Go now."
      Repeats shorter than the minimum normalized length are ignored.
"""


from dataclasses import dataclass

from repeat_lens.analysis import (
    AnalysisDocument,
    AnalysisOptions,
    DetectionLevel,
    Repetition,
)

from repeat_lens.detectors.base import Detector, DetectorConfig
from repeat_lens.detectors.helpers import SpanGroups, build_repetitions, normalize_text


@dataclass
class SentenceRepeatDetectorConfig(DetectorConfig):
    """Config for sentence grouping."""

    min_chars: int
    display_chars: int


class SentenceRepeatDetector(Detector[SentenceRepeatDetectorConfig]):
    """Group identical normalized sentences by ordinal position."""

    name = "sentence_repeat"
    level = DetectionLevel.SENTENCE

    def example_repetitions(self) -> list[str]:
        """Return samples that should produce sentence groups."""
        return [
            "The cat sat on the mat. The cat sat on the mat. The dog ran.",
            "Deploys happen every Friday! We test first. Deploys happen every Friday!",
        ]

    def example_non_repetitions(self) -> list[str]:
        """Return samples that should produce no sentence groups."""
        return [
            "Go now. Go now. Go now.",
            "The first sentence is long enough. The second one differs from it.",
            "No terminator here so nothing counts as a sentence",
        ]

    def forward(
        self, document: AnalysisDocument, options: AnalysisOptions
    ) -> list[Repetition]:
        groups = SpanGroups()
        for ordinal, sentence in enumerate(document.sentences):
            normalized = normalize_text(sentence.raw, options)
            if len(normalized) > self.config.min_chars:
                groups.add(normalized, ordinal, sentence.text)

        return build_repetitions(
            groups.repeated(), self.level, options, self.config.display_chars
        )

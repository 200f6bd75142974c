"""Detect repeated paragraphs and repeated runs of consecutive paragraphs.

Objective: Find whole paragraphs that recur verbatim (after normalization) and
runs of two or more consecutive paragraphs that recur as a block, which usually
means a section was pasted twice.

Example Repetitions:
    - The same 60-character disclaimer paragraph at the top and bottom.
      Single paragraph group with ``paragraph_count == 1``.
    - An intro and a summary paragraph copied together into a later chapter.
      Run group with ``paragraph_count == 2``.

Example Non-Repetitions:
    - A one-paragraph document.
      Grouping needs at least two occurrences.
    - Two short identical lines such as "Thanks!".
      Paragraphs must exceed the minimum normalized length.

Keys: singles are keyed by ``(1, normalized)`` and runs by
``(run_length, normalized)``, so a single paragraph never collides with a run
whose joined text happens to normalize the same way.
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

_RUN_SEPARATOR = "\n\n"


@dataclass
class ParagraphRepeatDetectorConfig(DetectorConfig):
    """Config for paragraph and paragraph-run grouping."""

    single_min_chars: int
    run_min_chars: int
    max_run_length: int
    display_chars: int


class ParagraphRepeatDetector(Detector[ParagraphRepeatDetectorConfig]):
    """Group identical paragraphs and identical multi-paragraph runs."""

    name = "paragraph_repeat"
    level = DetectionLevel.PARAGRAPH

    def example_repetitions(self) -> list[str]:
        """Return samples that should produce paragraph groups."""
        notice = "This notice applies to every page of the handbook without exception."
        return [
            f"{notice}\n\nSome unrelated middle paragraph.\n\n{notice}",
            (
                f"<p>{notice}</p><p>Another paragraph in between.</p><p>{notice}</p>"
            ),
        ]

    def example_non_repetitions(self) -> list[str]:
        """Return samples that should produce no paragraph groups."""
        return [
            "Only one paragraph lives in this document and it is long enough.",
            "Thanks!\n\nThanks!\n\nThanks!",
        ]

    def forward(
        self, document: AnalysisDocument, options: AnalysisOptions
    ) -> list[Repetition]:
        """Group single paragraphs, then runs of 2..max_run_length paragraphs."""
        paragraphs = document.paragraphs
        groups = SpanGroups()

        for index, paragraph in enumerate(paragraphs):
            normalized = normalize_text(paragraph, options)
            if len(normalized) > self.config.single_min_chars:
                groups.add((1, normalized), index, paragraph, paragraph_count=1)

        max_run = min(self.config.max_run_length, len(paragraphs))
        for run_length in range(2, max_run + 1):
            for start in range(len(paragraphs) - run_length + 1):
                combined = _RUN_SEPARATOR.join(paragraphs[start : start + run_length])
                normalized = normalize_text(combined, options)
                if len(normalized) > self.config.run_min_chars:
                    groups.add(
                        (run_length, normalized),
                        start,
                        combined,
                        paragraph_count=run_length,
                    )

        return build_repetitions(
            groups.repeated(), self.level, options, self.config.display_chars
        )

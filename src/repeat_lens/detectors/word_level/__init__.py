"""Word-level detectors."""

from .word_sequence_detector import WordSequenceDetector, WordSequenceDetectorConfig

__all__ = [
    "WordSequenceDetector",
    "WordSequenceDetectorConfig",
]

"""Sentence-level detectors."""

from .sentence_repeat_detector import (
    SentenceRepeatDetector,
    SentenceRepeatDetectorConfig,
)

__all__ = [
    "SentenceRepeatDetector",
    "SentenceRepeatDetectorConfig",
]

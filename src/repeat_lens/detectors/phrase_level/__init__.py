"""Phrase-level detectors."""

from .phrase_repeat_detector import PhraseRepeatDetector, PhraseRepeatDetectorConfig

__all__ = [
    "PhraseRepeatDetector",
    "PhraseRepeatDetectorConfig",
]

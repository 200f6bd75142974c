"""Paragraph-level detectors."""

from .paragraph_repeat_detector import (
    ParagraphRepeatDetector,
    ParagraphRepeatDetectorConfig,
)

__all__ = [
    "ParagraphRepeatDetector",
    "ParagraphRepeatDetectorConfig",
]

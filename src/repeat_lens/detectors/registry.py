"""Detector registry and class resolution helpers."""


from typing import TypeAlias

from .base import Detector, DetectorConfig
from .paragraph_level import ParagraphRepeatDetector
from .phrase_level import PhraseRepeatDetector
from .sentence_level import SentenceRepeatDetector
from .word_level import WordSequenceDetector

DetectorType: TypeAlias = type[Detector[DetectorConfig]]
DetectorList: TypeAlias = list[Detector[DetectorConfig]]

DEFAULT_DETECTOR_TYPES: tuple[DetectorType, ...] = (
    ParagraphRepeatDetector,
    SentenceRepeatDetector,
    PhraseRepeatDetector,
    WordSequenceDetector,
)


def detector_type_name(detector_type: DetectorType) -> str:
    """Return the canonical fully-qualified name for a detector class."""
    return f"{detector_type.__module__}.{detector_type.__name__}"


_DETECTOR_TYPES_BY_KEY: dict[str, DetectorType] = {}
for _detector_type in DEFAULT_DETECTOR_TYPES:
    _DETECTOR_TYPES_BY_KEY[detector_type_name(_detector_type)] = _detector_type
    _DETECTOR_TYPES_BY_KEY[_detector_type.__name__] = _detector_type
del _detector_type


def resolve_detector_type(detector_type: str) -> DetectorType:
    """Resolve a detector class from a full or short class name."""
    resolved = _DETECTOR_TYPES_BY_KEY.get(detector_type)
    if resolved is None:
        known = ", ".join(sorted(_DETECTOR_TYPES_BY_KEY))
        raise KeyError(
            f"Unknown detector_type '{detector_type}'. Known detector types: {known}"
        )
    return resolved

"""Detector framework exports."""

from .base import Detector, DetectorConfig
from .registry import DetectorList
from .scanner import Scanner, default_scanner, filter_repetitions, scan

__all__ = [
    "Detector",
    "DetectorConfig",
    "DetectorList",
    "Scanner",
    "default_scanner",
    "filter_repetitions",
    "scan",
]

"""Public package interface for repeat-lens."""

from .analysis import (
    AnalysisOptions,
    DetectionLevel,
    InvalidConfigurationError,
    MatchInfo,
    RankingPolicy,
    Repetition,
    ScanResult,
    Statistics,
    TextRange,
    WindowPolicy,
    compute_statistics,
)
from .cli import cli_main
from .detectors import Scanner, filter_repetitions, scan
from .server import find_text_matches, main, scan_file, scan_text
from .similarity import (
    SelectionAnalysis,
    analyze_selection,
    determine_selection_level,
    find_matches,
    levenshtein_distance,
)

__all__ = [
    "AnalysisOptions",
    "DetectionLevel",
    "InvalidConfigurationError",
    "MatchInfo",
    "RankingPolicy",
    "Repetition",
    "ScanResult",
    "Scanner",
    "SelectionAnalysis",
    "Statistics",
    "TextRange",
    "WindowPolicy",
    "analyze_selection",
    "cli_main",
    "compute_statistics",
    "determine_selection_level",
    "filter_repetitions",
    "find_matches",
    "find_text_matches",
    "levenshtein_distance",
    "main",
    "scan",
    "scan_file",
    "scan_text",
]

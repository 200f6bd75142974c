"""Scanner orchestration and JSONL serialization helpers."""


import json
import logging
from collections.abc import Iterable, Mapping
from functools import cache
from importlib.resources import files
from pathlib import Path

from repeat_lens.analysis import (
    AnalysisDocument,
    AnalysisOptions,
    DEFAULT_OPTIONS,
    DetectionLevel,
    Repetition,
    ScanResult,
    compute_statistics,
    parse_level,
)

from .registry import DetectorList, detector_type_name, resolve_detector_type

logger = logging.getLogger(__name__)

_DETECTOR_TYPE_FIELD = "detector_type"
_CONFIG_FIELD = "config"


class Scanner:
    """Level-indexed detector set with JSONL load/save."""

    def __init__(self, detectors: DetectorList) -> None:
        """Initialize a scanner from instantiated detectors, one per level."""
        self.detectors = list(detectors)
        self._by_level = {detector.level: detector for detector in self.detectors}

    @classmethod
    def from_jsonl(cls, path: str | Path | None = None) -> "Scanner":
        """Build a scanner from a JSONL detector-settings file.

        Args:
            path: JSONL path. If omitted, loads packaged defaults.
        """
        raw_lines = _read_jsonl_lines(path)
        detectors = _parse_detectors_from_jsonl(raw_lines)
        if not detectors:
            source = "<package default>" if path is None else str(path)
            raise ValueError(f"JSONL detector configuration is empty: {source}")
        return cls(detectors)

    def to_jsonl(self, path: str | Path) -> None:
        """Write this scanner's detector settings to a JSONL file."""
        output_path = Path(path)
        with output_path.open("w", encoding="utf-8") as handle:
            for detector in self.detectors:
                payload = {
                    _DETECTOR_TYPE_FIELD: detector_type_name(type(detector)),
                    _CONFIG_FIELD: detector.to_dict(),
                }
                handle.write(json.dumps(payload, sort_keys=True))
                handle.write("\n")

    @property
    def levels(self) -> tuple[DetectionLevel, ...]:
        return tuple(self._by_level)

    def detect(
        self,
        document: AnalysisDocument,
        level: DetectionLevel | str,
        options: AnalysisOptions = DEFAULT_OPTIONS,
    ) -> list[Repetition]:
        """Run the detector registered for ``level`` over a prepared document."""
        resolved = parse_level(level)
        detector = self._by_level.get(resolved)
        if detector is None:
            raise KeyError(f"No detector configured for level '{resolved.value}'")
        return detector.forward(document, options)

    def scan(
        self,
        text: str,
        level: DetectionLevel | str,
        options: AnalysisOptions | None = None,
    ) -> ScanResult:
        """Scan ``text`` at one level and return ranked groups plus statistics."""
        active_options = DEFAULT_OPTIONS if options is None else options
        resolved = parse_level(level)
        document = AnalysisDocument.from_text(text)
        repetitions = self.detect(document, resolved, active_options)
        stats = compute_statistics(text, repetitions)
        logger.debug(
            "scan level=%s words=%d groups=%d instances=%d",
            resolved.value,
            stats.word_count,
            stats.repetition_count,
            stats.instance_count,
        )
        return ScanResult(level=resolved, repetitions=tuple(repetitions), stats=stats)


@cache
def default_scanner() -> Scanner:
    """Return the scanner built from packaged detector settings."""
    return Scanner.from_jsonl()


def scan(
    text: str,
    level: DetectionLevel | str,
    options: AnalysisOptions | None = None,
) -> ScanResult:
    """Scan ``text`` with the packaged detector settings."""
    return default_scanner().scan(text, level, options)


def filter_repetitions(
    repetitions: Iterable[Repetition], search_term: str
) -> list[Repetition]:
    """Keep groups whose full text contains ``search_term``, ignoring case."""
    needle = search_term.strip().lower()
    if not needle:
        return list(repetitions)
    return [item for item in repetitions if needle in item.full_text.lower()]


def _read_jsonl_lines(path: str | Path | None) -> list[str]:
    """Read raw JSONL lines from a path or packaged defaults."""
    if path is None:
        raw_text = (
            files("repeat_lens.detectors")
            .joinpath("assets/default.jsonl")
            .read_text(encoding="utf-8")
        )
        return raw_text.splitlines()
    return Path(path).read_text(encoding="utf-8").splitlines()


def _parse_detectors_from_jsonl(lines: Iterable[str]) -> DetectorList:
    """Parse and instantiate detectors from JSONL lines."""
    detectors: DetectorList = []
    for line_number, line in enumerate(lines, start=1):
        stripped = line.strip()
        if not stripped:
            continue

        try:
            payload = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON on line {line_number}: {exc.msg}") from exc

        if not isinstance(payload, dict):
            raise TypeError(f"Line {line_number} must be a JSON object")

        detector_type_raw = payload.get(_DETECTOR_TYPE_FIELD)
        if not isinstance(detector_type_raw, str):
            raise TypeError(
                f"Line {line_number} must contain string '{_DETECTOR_TYPE_FIELD}'"
            )

        config_raw = payload.get(_CONFIG_FIELD)
        if not isinstance(config_raw, Mapping):
            raise TypeError(f"Line {line_number} must contain object '{_CONFIG_FIELD}'")

        detector_type = resolve_detector_type(detector_type_raw)
        detectors.append(detector_type.from_dict(config_raw))

    return detectors

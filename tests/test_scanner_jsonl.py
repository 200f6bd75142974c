"""Tests for JSONL-backed detector settings."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from repeat_lens.detectors import Scanner
from repeat_lens.detectors.sentence_level import SentenceRepeatDetector


def test_scanner_jsonl_round_trip_preserves_detectors_and_configs(
    tmp_path: Path,
) -> None:
    """Writing then reading a scanner should preserve order and settings."""
    scanner = Scanner.from_jsonl()
    output_path = tmp_path / "round_trip.jsonl"
    scanner.to_jsonl(output_path)

    rebuilt = Scanner.from_jsonl(output_path)
    assert [type(detector) for detector in rebuilt.detectors] == [
        type(detector) for detector in scanner.detectors
    ]
    assert [detector.to_dict() for detector in rebuilt.detectors] == [
        detector.to_dict() for detector in scanner.detectors
    ]


def test_empty_config_file_is_rejected(tmp_path: Path) -> None:
    config_path = tmp_path / "empty.jsonl"
    config_path.write_text("\n\n", encoding="utf-8")

    with pytest.raises(ValueError, match="empty"):
        Scanner.from_jsonl(config_path)


def test_invalid_json_reports_line_number(tmp_path: Path) -> None:
    config_path = tmp_path / "broken.jsonl"
    config_path.write_text(
        '{"detector_type": "SentenceRepeatDetector", "config": {}}\n{not json\n',
        encoding="utf-8",
    )

    with pytest.raises(ValueError, match="line 2"):
        Scanner.from_jsonl(config_path)


def test_missing_config_object_is_a_type_error(tmp_path: Path) -> None:
    config_path = tmp_path / "missing.jsonl"
    config_path.write_text(
        json.dumps({"detector_type": "SentenceRepeatDetector"}) + "\n",
        encoding="utf-8",
    )

    with pytest.raises(TypeError, match="'config'"):
        Scanner.from_jsonl(config_path)


def test_custom_sentence_threshold_changes_scan_output(tmp_path: Path) -> None:
    """A lower sentence min_chars lets short repeated sentences through."""
    config_path = tmp_path / "short_sentences.jsonl"
    config_path.write_text(
        json.dumps(
            {
                "detector_type": "SentenceRepeatDetector",
                "config": {"min_chars": 5, "display_chars": 100},
            }
        )
        + "\n",
        encoding="utf-8",
    )

    scanner = Scanner.from_jsonl(config_path)
    assert isinstance(scanner.detectors[0], SentenceRepeatDetector)

    custom = scanner.scan("Go now. Go now.", "sentence")
    assert [item.text for item in custom.repetitions] == ["Go now."]
    assert custom.repetitions[0].indices == (0, 1)

    packaged = Scanner.from_jsonl().scan("Go now. Go now.", "sentence")
    assert packaged.repetitions == ()


def test_scanner_without_level_detector_raises_key_error(tmp_path: Path) -> None:
    config_path = tmp_path / "sentence_only.jsonl"
    config_path.write_text(
        json.dumps(
            {
                "detector_type": "SentenceRepeatDetector",
                "config": {"min_chars": 20, "display_chars": 100},
            }
        )
        + "\n",
        encoding="utf-8",
    )

    scanner = Scanner.from_jsonl(config_path)
    with pytest.raises(KeyError, match="paragraph"):
        scanner.scan("Some text.", "paragraph")

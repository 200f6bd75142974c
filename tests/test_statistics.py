"""Tests for statistics, severity, and result filtering helpers."""

from __future__ import annotations

from repeat_lens.analysis import (
    DetectionLevel,
    Repetition,
    compute_severity,
    compute_statistics,
    context_around,
    round_half_up,
    truncate_text,
)
from repeat_lens.detectors import filter_repetitions


def _repetition(
    text: str, count: int, severity: int | None = None
) -> Repetition:
    return Repetition(
        id=f"word-{count}",
        text=text,
        full_text=text,
        count=count,
        level=DetectionLevel.WORD,
        indices=tuple(range(count)),
        severity=severity,
    )


def test_efficiency_subtracts_repeated_instances_from_word_count() -> None:
    text = "one two three four five six seven eight nine ten"
    stats = compute_statistics(text, [_repetition("one two", 4)])

    assert stats.word_count == 10
    assert stats.instance_count == 4
    assert stats.unique_words == 6
    assert stats.efficiency_score == 60


def test_efficiency_is_clamped_at_zero() -> None:
    stats = compute_statistics("one two three", [_repetition("one", 5)])
    assert stats.unique_words == 0
    assert stats.efficiency_score == 0


def test_empty_text_is_fully_efficient() -> None:
    stats = compute_statistics("", [])
    assert stats.efficiency_score == 100
    assert stats.repetition_count == 0
    assert stats.average_severity == 0


def test_average_severity_rounds_half_up() -> None:
    stats = compute_statistics(
        "a b c d e f g h",
        [_repetition("a", 2, severity=10), _repetition("b", 2, severity=21)],
    )
    assert stats.average_severity == 16


def test_severity_caps_count_and_length_factors() -> None:
    assert compute_severity(2, 23) == 9
    assert compute_severity(5, 100) == 100
    assert compute_severity(50, 1000) == 600


def test_round_half_up_breaks_ties_upward() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(2.49) == 2


def test_truncate_and_context_helpers() -> None:
    assert truncate_text("abcdef", 3) == "abc..."
    assert truncate_text("abc", 3) == "abc"
    assert context_around("0123456789", 4, 2, 2) == "...234567..."
    assert context_around("abc", 0, 3, 30) == "abc"


def test_filter_repetitions_matches_case_insensitively() -> None:
    groups = [
        _repetition("Quarterly Budget review", 2),
        _repetition("canary rollout", 3),
    ]
    assert [item.text for item in filter_repetitions(groups, "budget")] == [
        "Quarterly Budget review"
    ]
    assert filter_repetitions(groups, "  ") == groups
    assert filter_repetitions(groups, "missing") == []


def test_repetition_payload_omits_unset_fields() -> None:
    payload = _repetition("canary rollout", 2).to_payload()
    assert payload == {
        "id": "word-2",
        "text": "canary rollout",
        "full_text": "canary rollout",
        "count": 2,
        "level": "word",
        "indices": [0, 1],
    }

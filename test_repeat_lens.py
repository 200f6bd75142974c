"""Tests for the repeat-lens scanner, selection matcher, and CLI."""

from __future__ import annotations

import json
import subprocess
import sys
import textwrap

from repeat_lens import (
    AnalysisOptions,
    TextRange,
    analyze_selection,
    scan,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

CLEAN_PROSE = textwrap.dedent("""\
    The harbor wakes before sunrise. Fishing crews load ice and bait
    while gulls circle the cranes.

    By noon the market fills with buyers. Restaurants haggle over
    mackerel, and tourists photograph crates of silver sardines.

    Evening brings quiet water. Lanterns glow along the pier as the
    last boats tie up for the night.
""")

WEEKLY_NOTE = "Our team ships the mobile release every second Tuesday after review."
FEEDBACK_NOTE = "Please send feedback about the beta build to the release channel."

REPETITIVE_PROSE = "\n\n".join(
    [WEEKLY_NOTE, FEEDBACK_NOTE, WEEKLY_NOTE, FEEDBACK_NOTE, WEEKLY_NOTE]
)

CLI = [sys.executable, "-m", "repeat_lens"]


# ---------------------------------------------------------------------------
# Engine: scanning
# ---------------------------------------------------------------------------


class TestScanBasics:
    def test_clean_prose_has_no_repeated_paragraphs(self):
        result = scan(CLEAN_PROSE, "paragraph")
        assert result.repetitions == ()
        assert result.stats.efficiency_score == 100

    def test_clean_prose_has_no_repeated_sentences(self):
        assert scan(CLEAN_PROSE, "sentence").repetitions == ()

    def test_empty_string_is_fully_efficient(self):
        result = scan("", "sentence")
        assert result.stats.efficiency_score == 100
        assert result.stats.word_count == 0

    def test_repetitive_prose_finds_paragraphs_and_runs(self):
        result = scan(REPETITIVE_PROSE, "paragraph")
        assert len(result.repetitions) == 5
        assert result.repetitions[0].paragraph_count == 3
        assert result.repetitions[0].severity == 80
        singles = [item for item in result.repetitions if item.paragraph_count == 1]
        assert sorted(item.count for item in singles) == [2, 3]
        assert result.stats.efficiency_score == 80

    def test_payload_is_json_serializable(self):
        payload = scan(REPETITIVE_PROSE, "paragraph").to_payload()
        round_tripped = json.loads(json.dumps(payload))
        assert round_tripped["level"] == "paragraph"
        assert len(round_tripped["repetitions"]) == 5


class TestSelection:
    def test_selection_finds_other_copies(self):
        analysis = analyze_selection(
            WEEKLY_NOTE, REPETITIVE_PROSE, TextRange(0, len(WEEKLY_NOTE))
        )
        assert len(analysis.exact_matches) == 2
        assert analysis.semantic_matches == ()

    def test_semantic_matching_finds_related_sentences(self):
        options = AnalysisOptions(semantic_similarity=True, similarity_threshold=30)
        analysis = analyze_selection(
            "Ship the mobile release after review.",
            REPETITIVE_PROSE,
            TextRange(0, 0),
            options,
        )
        assert analysis.exact_matches == ()
        assert analysis.semantic_matches
        assert all(
            match.similarity >= 30 for match in analysis.semantic_matches
        )


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


class TestCLI:
    def test_clean_file_exit_0(self, tmp_path):
        f = tmp_path / "clean.md"
        f.write_text(CLEAN_PROSE)
        proc = subprocess.run([*CLI, str(f)], capture_output=True, text=True)
        assert proc.returncode == 0
        assert "100/100 [paragraph]" in proc.stdout

    def test_repetitive_file_fails_threshold(self, tmp_path):
        f = tmp_path / "repeats.md"
        f.write_text(REPETITIVE_PROSE)
        proc = subprocess.run(
            [*CLI, "-t", "90", str(f)], capture_output=True, text=True
        )
        assert proc.returncode == 1

    def test_missing_file_exit_2(self):
        proc = subprocess.run(
            [*CLI, "/no/such/file.md"], capture_output=True, text=True
        )
        assert proc.returncode == 2
        assert "No such file" in proc.stderr

    def test_json_flag_outputs_valid_json(self, tmp_path):
        f = tmp_path / "doc.md"
        f.write_text(REPETITIVE_PROSE)
        proc = subprocess.run([*CLI, "--json", str(f)], capture_output=True, text=True)
        data = json.loads(proc.stdout)
        assert data["source"] == str(f)
        assert "repetitions" in data
        assert "stats" in data

    def test_stdin_pipe(self):
        proc = subprocess.run(
            [*CLI, "-"],
            input=CLEAN_PROSE,
            capture_output=True,
            text=True,
        )
        assert proc.returncode == 0
        assert proc.stdout.startswith("<stdin>: 100/100")

    def test_multiple_files(self, tmp_path):
        clean = tmp_path / "clean.md"
        clean.write_text(CLEAN_PROSE)
        repeats = tmp_path / "repeats.md"
        repeats.write_text(REPETITIVE_PROSE)
        proc = subprocess.run(
            [*CLI, "-t", "90", str(clean), str(repeats)],
            capture_output=True,
            text=True,
        )
        # exit 1 because the second file scores below the threshold
        assert proc.returncode == 1
        assert "clean.md" in proc.stdout
        assert "repeats.md" in proc.stdout

"""CLI entry point for the ``rl`` repetition finder.

Usage examples::

    # Scan files for repeated paragraphs (the default level)
    rl README.md docs/*.md

    # Scan inline text for repeated sentences
    rl -l sentence "This is some test text. This is some test text."

    # Scan from stdin
    cat essay.txt | rl -

    # Machine-readable JSON output
    rl -j report.md

    # Verbose: show each repeated group
    rl -v -l phrase draft.md

    # Efficiency score only
    rl -s draft.md

    # Find other occurrences of a selection, including similar sentences
    rl --find "quick brown fox" --semantic draft.md

    # Use a custom JSONL detector config
    rl -c config.jsonl draft.md

    # Set exit code threshold (exit 1 if any input scores below 80)
    rl -t 80 draft.md
"""


import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, TextIO, TypeAlias

from .analysis import (
    AnalysisOptions,
    DetectionLevel,
    InvalidConfigurationError,
    RankingPolicy,
    WindowPolicy,
)
from .detectors import Scanner
from .similarity import analyze_selection, locate_selection
from .version import PACKAGE_VERSION

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_THRESHOLD_FAILURE = 1
EXIT_ERROR = 2

InputValue: TypeAlias = str | Path


@dataclass(frozen=True)
class InputTarget:
    """Typed representation of a CLI input target."""

    kind: Literal["file", "stdin", "text"]
    value: InputValue
    label: str


def _format_summary_line(label: str, result: dict) -> str:
    """Build a one-line summary for a single scanned input."""
    stats = result["stats"]
    return (
        f"{label}: {stats['efficiency_score']}/100 [{result['level']}] "
        f"({stats['word_count']} words, {stats['repetition_count']} groups, "
        f"{stats['instance_count']} instances)"
    )


def _print_repetitions(result: dict, file: TextIO = sys.stdout) -> None:
    """Print each repeated group under the summary line."""
    for item in result["repetitions"]:
        severity = item.get("severity")
        rank = f" severity={severity}" if severity is not None else ""
        print(f"  x{item['count']}{rank}  {item['text']!r}", file=file)


def _print_matches(result: dict, file: TextIO = sys.stdout) -> None:
    """Print selection matches with their similarity and context."""
    for match in result["selection"]["matches"]:
        kind = "semantic" if match["is_semantic"] else "exact"
        print(
            f"  @{match['index']} {kind} {match['similarity']}%  {match['context']}",
            file=file,
        )


# ---------------------------------------------------------------------------
# Core analysis dispatch
# ---------------------------------------------------------------------------


def _scan_text(
    text: str,
    label: str,
    args: argparse.Namespace,
    options: AnalysisOptions,
    scanner: Scanner,
) -> dict:
    """Run a scan, optionally match a selection, and attach the source label."""
    result = scanner.scan(text, args.level, options).to_payload()
    result["source"] = label
    if args.find:
        text_range = locate_selection(args.find, text, options)
        result["selection"] = analyze_selection(
            args.find, text, text_range, options
        ).to_payload()
    return result


def _scan_file(
    path: Path,
    args: argparse.Namespace,
    options: AnalysisOptions,
    scanner: Scanner,
) -> dict:
    """Read a file and scan its contents."""
    text = path.read_text(encoding="utf-8")
    return _scan_text(text, str(path), args, options, scanner)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""
    p = argparse.ArgumentParser(
        prog="rl",
        description="Find repeated paragraphs, sentences, phrases, and words.",
        epilog="Pass file paths, '-' for stdin, or quoted inline text.",
    )
    p.add_argument(
        "inputs",
        nargs="+",
        metavar="INPUT",
        help="Inputs to scan: files, '-' for stdin, or quoted inline text.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=PACKAGE_VERSION,
        help="Show package version and exit.",
    )
    p.add_argument(
        "-l", "--level",
        choices=[level.value for level in DetectionLevel],
        default=DetectionLevel.PARAGRAPH.value,
        help="Detection level (default: paragraph).",
    )
    p.add_argument(
        "-m", "--min-length",
        type=int,
        default=3,
        metavar="WORDS",
        help="Minimum window length in words for phrase/word scans.",
    )
    p.add_argument(
        "--case-sensitive",
        action="store_true",
        default=False,
        help="Compare text without folding case.",
    )
    p.add_argument(
        "--ignore-punctuation",
        action="store_true",
        default=False,
        help="Strip punctuation before comparing.",
    )
    p.add_argument(
        "--ranking",
        choices=[policy.value for policy in RankingPolicy],
        default=RankingPolicy.SEVERITY.value,
        help="Order groups by severity score or by raw count.",
    )
    p.add_argument(
        "--windows",
        choices=[policy.value for policy in WindowPolicy],
        default=WindowPolicy.SIMPLE.value,
        help="Maximum window length formula for phrase/word scans.",
    )
    p.add_argument(
        "--find",
        default=None,
        metavar="TEXT",
        help="Also report other occurrences of TEXT in each input.",
    )
    p.add_argument(
        "--semantic",
        action="store_true",
        default=False,
        help="With --find, include similar sentences, not only exact matches.",
    )
    p.add_argument(
        "--similarity-threshold",
        type=int,
        default=80,
        metavar="SCORE",
        help="Minimum similarity (0-100) for semantic matches.",
    )
    p.add_argument(
        "-j", "--json",
        action="store_true",
        default=False,
        help="Output results as JSON.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="store_true",
        default=False,
        help="Show individual repetition groups and matches.",
    )
    p.add_argument(
        "-q", "--quiet",
        action="store_true",
        default=False,
        help="Only print sources that fail the threshold.",
    )
    p.add_argument(
        "-t", "--threshold",
        type=int,
        default=0,
        metavar="SCORE",
        help="Minimum efficiency score (0-100). Exit 1 if any input scores below this.",
    )
    p.add_argument(
        "-c", "--config",
        default=None,
        metavar="JSONL",
        help="Path to JSONL detector configuration. Defaults to packaged settings.",
    )
    p.add_argument(
        "-s", "--score-only",
        action="store_true",
        default=False,
        help="Print efficiency score only.",
    )
    p.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity on stderr.",
    )
    return p


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def _is_inline_text_argument(value: str) -> bool:
    """Return whether a positional argument should be treated as inline text."""
    return any(ch.isspace() for ch in value)


def _resolve_inputs(args: argparse.Namespace) -> list[InputTarget]:
    """Resolve positional args into typed input targets."""
    inputs: list[InputTarget] = []
    for index, raw in enumerate(args.inputs, start=1):
        if raw == "-":
            inputs.append(InputTarget(kind="stdin", value=raw, label="<stdin>"))
            continue
        candidate_path = Path(raw)
        if candidate_path.is_file():
            inputs.append(
                InputTarget(kind="file", value=candidate_path, label=str(candidate_path))
            )
            continue
        if _is_inline_text_argument(raw):
            inputs.append(InputTarget(kind="text", value=raw, label=f"<text:{index}>"))
            continue
        inputs.append(InputTarget(kind="file", value=candidate_path, label=str(candidate_path)))
    return inputs


def _build_options(args: argparse.Namespace) -> AnalysisOptions:
    """Translate parsed flags into analysis options."""
    return AnalysisOptions(
        min_length=args.min_length,
        similarity_threshold=args.similarity_threshold,
        ignore_case=not args.case_sensitive,
        ignore_punctuation=args.ignore_punctuation,
        semantic_similarity=args.semantic,
        ranking=RankingPolicy(args.ranking),
        window_policy=WindowPolicy(args.windows),
    )


def _fails_threshold(result: dict, args: argparse.Namespace) -> bool:
    return args.threshold > 0 and result["stats"]["efficiency_score"] < args.threshold


def _emit_result(result: dict, args: argparse.Namespace) -> None:
    """Print one scanned result immediately."""
    if args.quiet and not _fails_threshold(result, args):
        return
    if args.score_only:
        print(result["stats"]["efficiency_score"], flush=True)
        return

    print(_format_summary_line(result["source"], result), flush=True)
    if args.verbose:
        if result["repetitions"]:
            _print_repetitions(result)
        if "selection" in result:
            _print_matches(result)


def cli_main(argv: list[str] | None = None) -> int:
    """Entry point for the ``rl`` command.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Exit code suitable for ``sys.exit``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, stream=sys.stderr)

    try:
        options = _build_options(args)
    except InvalidConfigurationError as exc:
        print(f"rl: {exc}", file=sys.stderr)
        return EXIT_ERROR

    inputs = _resolve_inputs(args)

    results: list[dict] = []
    threshold_failed = False
    scanner = Scanner.from_jsonl(args.config)

    for target in inputs:
        if target.kind == "stdin":
            text = sys.stdin.read()
            result = _scan_text(text, target.label, args, options, scanner)
        elif target.kind == "text":
            assert isinstance(target.value, str)
            result = _scan_text(target.value, target.label, args, options, scanner)
        else:
            assert isinstance(target.value, Path)
            path = target.value
            if not path.is_file():
                print(f"rl: {path}: No such file", file=sys.stderr)
                continue
            try:
                result = _scan_file(path, args, options, scanner)
            except (OSError, UnicodeDecodeError) as exc:
                print(f"rl: {path}: {exc}", file=sys.stderr)
                continue

        results.append(result)
        if _fails_threshold(result, args):
            threshold_failed = True

        if not args.json:
            _emit_result(result, args)

    if not results:
        return EXIT_ERROR

    # --- Output ---
    if args.json:
        out = results if len(results) > 1 else results[0]
        json.dump(out, sys.stdout, indent=2)
        sys.stdout.write("\n")

    # --- Exit code ---
    if threshold_failed:
        return EXIT_THRESHOLD_FAILURE

    return EXIT_OK


def main() -> None:
    """Thin wrapper that calls ``sys.exit`` with the CLI return code."""
    sys.exit(cli_main())

"""MCP server exposing repetition scans and selection matching."""


import argparse
import json
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from .analysis import AnalysisOptions, InvalidConfigurationError, TextRange
from .detectors import Scanner
from .similarity import analyze_selection
from .version import PACKAGE_VERSION

MCP_SERVER_NAME = "repeat-lens"
mcp_server = FastMCP(MCP_SERVER_NAME)
DEFAULT_SCANNER = Scanner.from_jsonl()
ACTIVE_SCANNER = DEFAULT_SCANNER


def _scan(
    text: str,
    level: str,
    options: AnalysisOptions,
    scanner: Scanner | None = None,
) -> dict:
    """Scan one text and return the serialized groups and statistics."""
    active_scanner = ACTIVE_SCANNER if scanner is None else scanner
    return active_scanner.scan(text, level, options).to_payload()


def _error(message: str) -> str:
    return json.dumps({"error": message})


@mcp_server.tool()
def scan_text(
    text: str,
    level: str = "paragraph",
    min_length: int = 3,
    ignore_case: bool = True,
    ignore_punctuation: bool = False,
    ranking: str = "severity",
) -> str:
    """Find repeated paragraphs, sentences, phrases, or word sequences.

    Returns a JSON object with the ranked repetition groups (text, count,
    occurrence indices, severity) and aggregate statistics including an
    efficiency score (0-100).
    """
    try:
        options = AnalysisOptions(
            min_length=min_length,
            ignore_case=ignore_case,
            ignore_punctuation=ignore_punctuation,
            ranking=ranking,
        )
        result = _scan(text, level, options)
    except InvalidConfigurationError as exc:
        return _error(str(exc))
    return json.dumps(result, indent=2)


@mcp_server.tool()
def scan_file(file_path: str, level: str = "paragraph", min_length: int = 3) -> str:
    """Find repeated content in a UTF-8 text file.

    Reads the file at the given path and runs the same scan as scan_text.
    """
    path = Path(file_path)
    if not path.is_file():
        return _error(f"File not found: {file_path}")

    try:
        text = path.read_text(encoding="utf-8")
    except Exception as exc:  # noqa: BLE001 - returning tool-safe error payload
        return _error(f"Could not read file: {exc}")

    try:
        result = _scan(text, level, AnalysisOptions(min_length=min_length))
    except InvalidConfigurationError as exc:
        return _error(str(exc))
    result["file"] = file_path
    return json.dumps(result, indent=2)


@mcp_server.tool()
def find_text_matches(
    selected_text: str,
    full_text: str,
    index: int,
    length: int | None = None,
    ignore_case: bool = True,
    ignore_punctuation: bool = False,
    semantic_similarity: bool = True,
    similarity_threshold: int = 60,
) -> str:
    """Find other places in full_text that repeat or resemble a selection.

    ``index`` is the selection's character offset in ``full_text``. Returns
    exact matches (similarity 100) followed by sentence-level semantic matches
    scored 0-100.
    """
    try:
        text_range = TextRange(
            index=index, length=len(selected_text) if length is None else length
        )
        options = AnalysisOptions(
            ignore_case=ignore_case,
            ignore_punctuation=ignore_punctuation,
            semantic_similarity=semantic_similarity,
            similarity_threshold=similarity_threshold,
        )
    except InvalidConfigurationError as exc:
        return _error(str(exc))
    analysis = analyze_selection(selected_text, full_text, text_range, options)
    return json.dumps(analysis.to_payload(), indent=2)


def _build_parser() -> argparse.ArgumentParser:
    """Construct the MCP server CLI parser."""
    parser = argparse.ArgumentParser(
        prog="repeat-lens",
        description="Run the repeat-lens MCP server on stdio.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=PACKAGE_VERSION,
        help="Show package version and exit.",
    )
    parser.add_argument(
        "-c", "--config",
        default=None,
        metavar="JSONL",
        help="Path to JSONL detector configuration. Defaults to packaged settings.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the repeat-lens MCP server on stdio."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    global ACTIVE_SCANNER
    ACTIVE_SCANNER = Scanner.from_jsonl(args.config)
    mcp_server.run()

"""MCP server exposing the style analyzer, highlighter and list engine."""


import argparse
import json
import logging
from pathlib import Path

from mcp.server.fastmcp import FastMCP

from .config import StyleConfig
from .linguistics import DEFAULT_MODEL, SpacyService
from .markdown import Highlighter, apply_edits, lists
from .ranges import TextRange
from .style import StyleAnalyzer
from .style.rules import Pipeline
from .version import PACKAGE_VERSION

logger = logging.getLogger(__name__)

MCP_SERVER_NAME = "freewrite"
mcp_server = FastMCP(MCP_SERVER_NAME)
DEFAULT_PIPELINE = Pipeline.from_jsonl()
ACTIVE_ANALYZER = StyleAnalyzer(pipeline=DEFAULT_PIPELINE)
ACTIVE_HIGHLIGHTER = Highlighter()


def _analyze(
    text: str,
    ignored_keys: list[str] | None = None,
    analyzer: StyleAnalyzer | None = None,
) -> dict:
    """Run all configured rules and return issues and per-category counts."""
    active_analyzer = ACTIVE_ANALYZER if analyzer is None else analyzer
    return active_analyzer.report(text, ignored_keys or ()).to_payload()


@mcp_server.tool()
def analyze_style(text: str, ignored_keys: list[str] | None = None) -> str:
    """Analyze prose for redundancy, weak style, punctuation and typography.

    Returns a JSON object with every issue (category, severity, character
    range, message, optional fix) plus per-category counts. Issues whose
    ignore key appears in ``ignored_keys`` are left out.
    """
    result = _analyze(text, ignored_keys)
    return json.dumps(result, indent=2)


@mcp_server.tool()
def analyze_style_file(file_path: str, ignored_keys: list[str] | None = None) -> str:
    """Analyze a file for prose style issues.

    Reads the file at the given path and runs the same analysis as
    analyze_style.
    """
    path = Path(file_path)
    if not path.is_file():
        return json.dumps({"error": f"File not found: {file_path}"})

    try:
        text = path.read_text(encoding="utf-8")
    except Exception as exc:  # noqa: BLE001 - returning tool-safe error payload
        return json.dumps({"error": f"Could not read file: {exc}"})

    result = _analyze(text, ignored_keys)
    result["file"] = file_path
    return json.dumps(result, indent=2)


@mcp_server.tool()
def highlight_markdown(
    text: str,
    selection_offset: int = 0,
    selection_length: int = 0,
    config: dict | None = None,
) -> str:
    """Compute markdown highlight spans for a buffer and caret selection.

    ``config`` takes the same keys as the editor style configuration
    (theme, typewriter_mode, highlight_scope, font_size, ...). Returns a JSON
    object with coalesced attribute spans, the focus ranges and, in
    typewriter mode with fixed scroll, a scroll request.
    """
    try:
        style = StyleConfig.from_dict(config)
    except (TypeError, ValueError) as exc:
        return json.dumps({"error": f"Invalid config: {exc}"})
    selection = TextRange(selection_offset, selection_length).clamped(len(text))
    result = ACTIVE_HIGHLIGHTER.highlight(text, selection, style)
    return json.dumps(result.to_payload(), indent=2)


@mcp_server.tool()
def continue_list(text: str, offset: int) -> str:
    """Apply list continuation for a newline typed at ``offset``.

    Returns a JSON object with ``handled`` (false when the line is not a
    list item), the resulting text and the caret offset.
    """
    affected = TextRange(offset, 0).clamped(len(text))
    batch = lists.continue_list(text, affected)
    if batch is None:
        return json.dumps({"handled": False, "text": text, "caret": affected.offset})
    return json.dumps(
        {
            "handled": True,
            "text": apply_edits(text, batch),
            "caret": batch.caret,
        },
        indent=2,
    )


def _build_parser() -> argparse.ArgumentParser:
    """Construct the MCP server CLI parser."""
    parser = argparse.ArgumentParser(
        prog="freewrite-mcp",
        description="Run the freewrite MCP server on stdio.",
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
        help="Path to JSONL rule configuration. Defaults to packaged settings.",
    )
    parser.add_argument(
        "-m", "--model",
        default=DEFAULT_MODEL,
        metavar="NAME",
        help=f"spaCy model used for tokens and sentences (default: {DEFAULT_MODEL}).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the freewrite MCP server on stdio."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    global ACTIVE_ANALYZER, ACTIVE_HIGHLIGHTER
    service = SpacyService.load(args.model)
    ACTIVE_ANALYZER = StyleAnalyzer(service, Pipeline.from_jsonl(args.config))
    ACTIVE_HIGHLIGHTER = Highlighter(segmenter=service)
    logger.debug(
        "Serving with model %r and rule config %s",
        args.model,
        args.config or "<packaged>",
    )
    mcp_server.run()

"""CLI entry point for the ``fw`` prose style checker.

Usage examples::

    # Check files by name
    fw README.md docs/*.md

    # Check inline text
    fw "There is a thing I think you should know."

    # Check from stdin
    cat essay.txt | fw -

    # Machine-readable JSON output
    fw -j report.md

    # Verbose: show individual issues (-vv also turns on debug logging)
    fw -v draft.md

    # Print the text with every non-overlapping fix applied
    fw --fix draft.md

    # Ignore issues by key (a lemma, a phrase, "filler", "start:<word>")
    fw -i really -i "kind of" draft.md

    # Use a custom JSONL rule config or spaCy model
    fw -c config.jsonl -m en_core_web_md draft.md

    # Exit 1 if any warning-severity issue is found
    fw --strict docs/*.md
"""


import argparse
import json
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, TextIO, TypeAlias

from .linguistics import DEFAULT_MODEL, SpacyService
from .style import AnalysisReport, StyleAnalyzer, StyleSeverity, apply_fixes
from .style.rules import Pipeline
from .version import PACKAGE_VERSION

# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

EXIT_OK = 0
EXIT_STRICT_FAILURE = 1
EXIT_ERROR = 2

# ---------------------------------------------------------------------------
# Severity decorations for terminal output
# ---------------------------------------------------------------------------

_SEVERITY_SYMBOLS: dict[str, str] = {
    "info": "-",
    "warning": "!",
}

InputValue: TypeAlias = str | Path


@dataclass(frozen=True)
class InputTarget:
    """Typed representation of a CLI input target."""

    kind: Literal["file", "stdin", "text"]
    value: InputValue
    label: str


def _line_column(text: str, offset: int) -> tuple[int, int]:
    """Convert a character offset to a 1-based line and column."""
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


def _format_summary_line(
    label: str,
    result: dict,
    *,
    show_counts: bool = False,
) -> str:
    """Build a one-line summary for a single analyzed input."""
    total = result["total"]
    warnings = sum(1 for issue in result["issues"] if issue["severity"] == "warning")
    noun = "issue" if total == 1 else "issues"
    line = f"{label}: {total} {noun} ({warnings} warnings, {result['fixable']} fixable)"
    if show_counts:
        active = {k: v for k, v in result["counts"].items() if v}
        if active:
            parts = " ".join(f"{k}={v}" for k, v in active.items())
            line += f"  ({parts})"
    return line


def _print_issues(result: dict, text: str, file: TextIO | None = None) -> None:
    """Print individual issues grouped under the result."""
    out = sys.stdout if file is None else file
    for issue in result["issues"]:
        line, column = _line_column(text, issue["range"]["offset"])
        sym = _SEVERITY_SYMBOLS.get(issue["severity"], "?")
        fix = issue["fix"]
        suggestion = ""
        if fix is not None and fix["replacement"] is not None:
            suggestion = f" -> {fix['replacement']!r}"
        print(
            f"  {sym} {line}:{column} {issue['category']}: "
            f"{issue['message']}{suggestion}  [{issue['rule']}]",
            file=out,
        )


# ---------------------------------------------------------------------------
# Core analysis dispatch
# ---------------------------------------------------------------------------


def _analyze_text(
    text: str,
    label: str,
    analyzer: StyleAnalyzer,
    ignored_keys: list[str],
    apply: bool,
) -> dict:
    """Run analysis and attach the source label."""
    report: AnalysisReport = analyzer.report(text, ignored_keys)
    result = report.to_payload()
    result["source"] = label
    if apply:
        result["fixed_text"] = apply_fixes(text, report.issues)
    return result


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Construct the CLI argument parser."""
    p = argparse.ArgumentParser(
        prog="fw",
        description="Prose style checker for redundancy, weak style and typography.",
        epilog="Pass file paths, '-' for stdin, or quoted inline text.",
    )
    p.add_argument(
        "inputs",
        nargs="+",
        metavar="INPUT",
        help="Inputs to check: files, '-' for stdin, or quoted inline text.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=PACKAGE_VERSION,
        help="Show package version and exit.",
    )
    p.add_argument(
        "-j", "--json",
        action="store_true",
        default=False,
        help="Output results as JSON.",
    )
    p.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Show individual issues. Repeat to enable debug logging.",
    )
    p.add_argument(
        "-c", "--config",
        default=None,
        metavar="JSONL",
        help="Path to JSONL rule configuration. Defaults to packaged settings.",
    )
    p.add_argument(
        "-m", "--model",
        default=DEFAULT_MODEL,
        metavar="NAME",
        help=f"spaCy model used for tokens and sentences (default: {DEFAULT_MODEL}).",
    )
    p.add_argument(
        "-i", "--ignore",
        action="append",
        default=[],
        metavar="KEY",
        help="Suppress issues with this ignore key. May be repeated.",
    )
    p.add_argument(
        "--fix",
        action="store_true",
        default=False,
        help="Print the text with all non-overlapping fixes applied.",
    )
    p.add_argument(
        "--strict",
        action="store_true",
        default=False,
        help="Exit 1 if any input has a warning-severity issue.",
    )
    p.add_argument(
        "--counts",
        action="store_true",
        default=False,
        help="Show per-category issue counts in the summary line.",
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


def _emit_result(result: dict, text: str, args: argparse.Namespace) -> None:
    """Print one analyzed result immediately."""
    if args.fix:
        sys.stdout.write(result["fixed_text"])
        if not result["fixed_text"].endswith("\n"):
            sys.stdout.write("\n")
        sys.stdout.flush()
        return

    print(
        _format_summary_line(result["source"], result, show_counts=args.counts),
        flush=True,
    )
    if args.verbose and result["issues"]:
        _print_issues(result, text)


def _has_warning(result: dict) -> bool:
    """Return whether any reported issue is warning severity."""
    return any(
        issue["severity"] == StyleSeverity.WARNING.value for issue in result["issues"]
    )


def cli_main(argv: list[str] | None = None) -> int:
    """Entry point for the ``fw`` command.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Exit code suitable for ``sys.exit``.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.verbose > 1:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    inputs = _resolve_inputs(args)

    try:
        pipeline = Pipeline.from_jsonl(args.config)
    except (OSError, ValueError, TypeError, KeyError) as exc:
        print(f"fw: {args.config}: {exc}", file=sys.stderr)
        return EXIT_ERROR
    analyzer = StyleAnalyzer(SpacyService.load(args.model), pipeline)

    results: list[dict] = []
    strict_failed = False

    for target in inputs:
        if target.kind == "stdin":
            text = sys.stdin.read()
        elif target.kind == "text":
            text = str(target.value)
        else:
            path = Path(target.value)
            if not path.is_file():
                print(f"fw: {path}: No such file", file=sys.stderr)
                continue
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                print(f"fw: {path}: {exc}", file=sys.stderr)
                continue

        result = _analyze_text(text, target.label, analyzer, args.ignore, args.fix)
        results.append(result)
        if args.strict and _has_warning(result):
            strict_failed = True

        if not args.json:
            _emit_result(result, text, args)

    if not results:
        return EXIT_ERROR

    # --- Output ---
    if args.json:
        out = results if len(results) > 1 else results[0]
        json.dump(out, sys.stdout, indent=2)
        sys.stdout.write("\n")

    # --- Exit code ---
    if strict_failed:
        return EXIT_STRICT_FAILURE

    return EXIT_OK


def main() -> None:
    """Thin wrapper that calls ``sys.exit`` with the CLI return code."""
    sys.exit(cli_main())

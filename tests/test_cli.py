"""Tests for ``fw`` CLI argument and output behavior."""

from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path

import pytest

from freewrite import cli
from freewrite.version import PACKAGE_VERSION


@pytest.fixture(autouse=True)
def _stub_model(monkeypatch: pytest.MonkeyPatch, stub_service) -> None:
    """Keep CLI tests independent of installed spaCy models."""
    monkeypatch.setattr(cli.SpacyService, "load", lambda *args, **kwargs: stub_service)


def _fake_result(source: str) -> dict[str, object]:
    """Build a minimal analysis payload used in CLI tests."""
    return {
        "source": source,
        "issues": [],
        "counts": {},
        "total": 0,
        "fixable": 0,
    }


def test_requires_at_least_one_input(capsys: pytest.CaptureFixture[str]) -> None:
    """Running ``fw`` with no args should exit with an argument error."""
    with pytest.raises(SystemExit) as raised:
        cli.cli_main([])

    assert raised.value.code == cli.EXIT_ERROR
    assert "the following arguments are required: INPUT" in capsys.readouterr().err


def test_version_flag_prints_package_version(
    capsys: pytest.CaptureFixture[str],
) -> None:
    """``--version`` should print package version and exit cleanly."""
    with pytest.raises(SystemExit) as raised:
        cli.cli_main(["--version"])

    assert raised.value.code == cli.EXIT_OK
    captured = capsys.readouterr()
    assert captured.out.strip() == PACKAGE_VERSION
    assert captured.err == ""


def test_accepts_inline_text_input(capsys: pytest.CaptureFixture[str]) -> None:
    """Inline quoted text should be analyzed as prose input."""
    exit_code = cli.cli_main(["Hello  world"])
    captured = capsys.readouterr()

    assert exit_code == cli.EXIT_OK
    assert captured.err == ""
    assert captured.out.startswith("<text:1>: 1 issue (0 warnings, 1 fixable)")


def test_verbose_lists_issues_with_positions(capsys: pytest.CaptureFixture[str]) -> None:
    """``-v`` should print each issue with its line and column."""
    exit_code = cli.cli_main(["-v", "Fine.\nwait--really"])
    out = capsys.readouterr().out

    assert exit_code == cli.EXIT_OK
    assert "2:5 Typography: Use an em dash -> '—'  [em_dash]" in out


def test_json_output_for_single_input(capsys: pytest.CaptureFixture[str]) -> None:
    """JSON mode should print one object for one input."""
    exit_code = cli.cli_main(["-j", "wait--really now"])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == cli.EXIT_OK
    assert payload["source"] == "<text:1>"
    assert payload["counts"]["Typography"] == 1
    em_dash = [issue for issue in payload["issues"] if issue["rule"] == "em_dash"]
    assert em_dash[0]["fix"]["replacement"] == "—"


def test_verbose_issue_lines_follow_redirected_stdout() -> None:
    """Issue lines should go to whatever stdout is current at call time."""
    buffer = io.StringIO()
    with contextlib.redirect_stdout(buffer):
        exit_code = cli.cli_main(["-v", "Fine.\nwait--really"])

    assert exit_code == cli.EXIT_OK
    lines = buffer.getvalue().splitlines()
    assert lines[0].startswith("<text:1>: ")
    assert any("[em_dash]" in line for line in lines[1:])


def test_fix_prints_corrected_text(capsys: pytest.CaptureFixture[str]) -> None:
    """``--fix`` should print the text with fixes applied instead of a summary."""
    exit_code = cli.cli_main(["--fix", "Hello  world--again"])

    assert exit_code == cli.EXIT_OK
    assert capsys.readouterr().out == "Hello world—again\n"


def test_ignore_flag_suppresses_issue_keys(capsys: pytest.CaptureFixture[str]) -> None:
    """``-i`` should drop issues with the given ignore key."""
    cli.cli_main(["-j", "-i", "very", "It was very good work."])
    payload = json.loads(capsys.readouterr().out)

    assert all(issue["ignored_key"] != "very" for issue in payload["issues"])


def test_strict_fails_on_warnings(capsys: pytest.CaptureFixture[str]) -> None:
    """``--strict`` should exit 1 when a warning-severity issue exists."""
    long_text = " ".join(["word"] * 45) + "."

    assert cli.cli_main(["--strict", long_text]) == cli.EXIT_STRICT_FAILURE
    assert cli.cli_main(["--strict", "Short and clear."]) == cli.EXIT_OK


def test_reads_stdin(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    """``-`` should read prose from standard input."""
    monkeypatch.setattr(cli.sys, "stdin", io.StringIO("wait--really"))

    exit_code = cli.cli_main(["-"])

    assert exit_code == cli.EXIT_OK
    assert capsys.readouterr().out.startswith("<stdin>: ")


def test_missing_file_is_reported(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """A missing path alone should report an error and exit 2."""
    missing = tmp_path / "missing.md"

    exit_code = cli.cli_main([str(missing)])

    assert exit_code == cli.EXIT_ERROR
    assert f"fw: {missing}: No such file" in capsys.readouterr().err


def test_streams_file_results_as_each_file_finishes(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Non-JSON output should emit per-file results in processing order."""
    first = tmp_path / "first.md"
    second = tmp_path / "second.md"
    first.write_text("alpha", encoding="utf-8")
    second.write_text("beta", encoding="utf-8")

    events: list[str] = []

    def fake_analyze_text(
        text: str,
        label: str,
        _analyzer: object,
        _ignored_keys: object,
        _apply: bool,
    ) -> dict[str, object]:
        events.append(f"analyze:{text}")
        return _fake_result(label)

    def fake_emit_result(
        result: dict[str, object], _text: str, _args: object
    ) -> None:
        events.append(f"emit:{result['source']}")

    monkeypatch.setattr(cli, "_analyze_text", fake_analyze_text)
    monkeypatch.setattr(cli, "_emit_result", fake_emit_result)

    exit_code = cli.cli_main([str(first), str(second)])

    assert exit_code == cli.EXIT_OK
    assert events == [
        "analyze:alpha",
        f"emit:{first}",
        "analyze:beta",
        f"emit:{second}",
    ]


def test_config_option_loads_pipeline_from_path(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    """Passing ``-c/--config`` should load the requested JSONL pipeline."""
    sample_file = tmp_path / "sample.md"
    sample_file.write_text("alpha", encoding="utf-8")
    config_file = tmp_path / "custom.jsonl"
    config_file.write_text("{}", encoding="utf-8")

    loaded_paths: list[str | None] = []

    class _FakePipeline:
        @classmethod
        def from_jsonl(cls, path: str | None = None) -> "_FakePipeline":
            loaded_paths.append(path)
            return cls()

    def fake_analyze_text(
        text: str,
        label: str,
        _analyzer: object,
        _ignored_keys: object,
        _apply: bool,
    ) -> dict[str, object]:
        return _fake_result(label)

    monkeypatch.setattr(cli, "Pipeline", _FakePipeline)
    monkeypatch.setattr(cli, "_analyze_text", fake_analyze_text)

    exit_code = cli.cli_main(["-c", str(config_file), str(sample_file)])

    assert exit_code == cli.EXIT_OK
    assert loaded_paths == [str(config_file)]


def test_broken_config_exits_with_error(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """An unreadable rule config should be reported, not raised."""
    config_file = tmp_path / "broken.jsonl"
    config_file.write_text("not json\n", encoding="utf-8")

    exit_code = cli.cli_main(["-c", str(config_file), "some inline text"])

    assert exit_code == cli.EXIT_ERROR
    assert "Invalid JSON on line 1" in capsys.readouterr().err


def test_rejects_unknown_flag(capsys: pytest.CaptureFixture[str]) -> None:
    """Options the CLI does not define should fail argument parsing."""
    with pytest.raises(SystemExit) as raised:
        cli.cli_main(["--glob", "*.md"])

    assert raised.value.code == cli.EXIT_ERROR
    assert "unrecognized arguments: --glob" in capsys.readouterr().err

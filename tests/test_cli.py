"""Tests for the cc-hook CLI."""

import io
import json
import sys
from pathlib import Path

import pytest

from cc_hook.cli import main
from cc_hook.schema import EVENT_SCHEMAS


def run_cli(monkeypatch: pytest.MonkeyPatch, *args: str, stdin: str = "") -> int:
    monkeypatch.setattr(sys, "argv", ["cc-hook", *args])
    monkeypatch.setattr(sys, "stdin", io.StringIO(stdin))
    return main()


class TestEventsCommand:
    def test_lists_events(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_cli(monkeypatch, "events") == 0
        assert capsys.readouterr().out.split() == list(EVENT_SCHEMAS)


class TestSchemaCommand:
    def test_prints_output_schema(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_cli(monkeypatch, "schema", "Stop", "--output") == 0
        schema = json.loads(capsys.readouterr().out)
        assert "decision" in schema["properties"]

    def test_unknown_event(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_cli(monkeypatch, "schema", "Nope") == 1
        assert "Unknown hook event 'Nope'" in capsys.readouterr().err


class TestValidateCommand:
    def test_valid_output_from_stdin(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = run_cli(
            monkeypatch, "validate", "Stop", "--output", stdin='{"decision": "block", "reason": "x"}'
        )
        assert code == 0
        assert capsys.readouterr().out.strip() == "OK"

    def test_invalid_output(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = run_cli(monkeypatch, "validate", "Stop", "--output", stdin='{"decision": "approve"}')
        assert code == 1
        assert "Field 'decision'" in capsys.readouterr().out

    def test_input_from_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        payload = tmp_path / "input.json"
        payload.write_text(
            json.dumps(
                {
                    "hook_event_name": "PreToolUse",
                    "session_id": "s",
                    "transcript_path": "/t",
                    "cwd": "/c",
                    "tool_name": "Bash",
                    "tool_input": {"command": "ls"},
                }
            )
        )
        assert run_cli(monkeypatch, "validate", "PreToolUse", str(payload)) == 0
        assert capsys.readouterr().out.strip() == "OK"

    def test_not_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_cli(monkeypatch, "validate", "Stop", stdin="{") == 1
        captured = capsys.readouterr()
        assert "not valid JSON" in captured.err
        assert captured.out == ""

    def test_missing_file(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        missing = tmp_path / "missing.json"
        assert run_cli(monkeypatch, "validate", "Stop", str(missing)) == 1
        captured = capsys.readouterr()
        assert f"could not read {missing}" in captured.err
        assert captured.out == ""


class TestNoCommand:
    def test_prints_help(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        assert run_cli(monkeypatch) == 0
        assert "usage: cc-hook" in capsys.readouterr().out

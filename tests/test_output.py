"""Tests for the output formatting system.

Covers:
- OutputFormat resolution (auto -> rich/plain based on TTY)
- NO_COLOR / TERM=dumb color disabling
- stdout vs stderr discipline
- Quiet and verbose modes
- format_response and print_table in each format
- Global instance management
"""

from __future__ import annotations

import json

import pytest

from hookpipe import output as output_module
from hookpipe.output import (
    OutputFormat,
    OutputManager,
    get_output,
    reset_output,
    set_output,
)


@pytest.fixture()
def non_tty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("hookpipe.output._is_tty", lambda: False)


@pytest.fixture()
def tty(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("hookpipe.output._is_tty", lambda: True)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.delenv("TERM", raising=False)


# ------------------------------------------------------------------ #
# Format resolution
# ------------------------------------------------------------------ #


class TestFormatResolution:
    def test_auto_is_plain_when_piped(self, non_tty: None) -> None:
        assert OutputManager().format == OutputFormat.PLAIN

    def test_auto_is_rich_on_terminal(self, tty: None) -> None:
        assert OutputManager().format == OutputFormat.RICH

    def test_auto_is_plain_without_color(self, tty: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("NO_COLOR", "1")
        assert OutputManager().format == OutputFormat.PLAIN

    def test_term_dumb_disables_color(self, tty: None, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TERM", "dumb")
        assert OutputManager().format == OutputFormat.PLAIN

    def test_explicit_format_wins(self, tty: None) -> None:
        assert OutputManager(format=OutputFormat.JSON).format == OutputFormat.JSON


# ------------------------------------------------------------------ #
# stdout
# ------------------------------------------------------------------ #


class TestFormatResponse:
    def test_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.JSON).format_response({"a": [1, 2]})
        assert json.loads(capsys.readouterr().out) == {"a": [1, 2]}

    def test_plain_dict(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN).format_response({"name": "x", "tags": ["a"]})
        assert capsys.readouterr().out.splitlines() == ["name\tx", 'tags\t["a"]']

    def test_plain_list_and_scalar(self, capsys: pytest.CaptureFixture[str]) -> None:
        manager = OutputManager(format=OutputFormat.PLAIN)
        manager.format_response(["a", "b"])
        manager.format_response(3)
        assert capsys.readouterr().out.splitlines() == ["a", "b", "3"]

    def test_rich_dict(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.RICH, no_color=True).format_response({"key": "value"})
        out = capsys.readouterr().out
        assert "key" in out
        assert "value" in out


class TestPrintTable:
    headers = ["Stage", "Hook"]
    rows = [["before", "onBefore"], ["success", "onSuccess"]]

    def test_json_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.JSON).print_table(self.headers, self.rows)
        assert json.loads(capsys.readouterr().out) == [
            {"Stage": "before", "Hook": "onBefore"},
            {"Stage": "success", "Hook": "onSuccess"},
        ]

    def test_plain_tsv(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN).print_table(self.headers, self.rows)
        assert capsys.readouterr().out.splitlines() == [
            "Stage\tHook",
            "before\tonBefore",
            "success\tonSuccess",
        ]

    def test_rich_table(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.RICH, no_color=True).print_table(
            self.headers, self.rows, title="Hooks"
        )
        out = capsys.readouterr().out
        assert "Hooks" in out
        assert "onSuccess" in out


# ------------------------------------------------------------------ #
# stderr
# ------------------------------------------------------------------ #


class TestMessages:
    def test_messages_go_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        manager = OutputManager(format=OutputFormat.PLAIN, no_color=True)
        manager.info("hello")
        manager.success("done")
        manager.warning("careful")
        manager.error("broken")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.splitlines() == ["hello", "done", "Warning: careful", "Error: broken"]

    def test_quiet_hides_info_and_success_only(self, capsys: pytest.CaptureFixture[str]) -> None:
        manager = OutputManager(format=OutputFormat.PLAIN, no_color=True, quiet=True)
        manager.info("hidden")
        manager.success("hidden")
        manager.warning("shown")
        manager.error("shown too")
        assert capsys.readouterr().err.splitlines() == ["Warning: shown", "Error: shown too"]

    def test_debug_requires_verbose(self, capsys: pytest.CaptureFixture[str]) -> None:
        OutputManager(format=OutputFormat.PLAIN, no_color=True).debug("invisible")
        verbose = OutputManager(format=OutputFormat.PLAIN, no_color=True, verbose=True)
        verbose.debug("visible")
        assert verbose.is_verbose is True
        assert capsys.readouterr().err.splitlines() == ["[debug] visible"]


# ------------------------------------------------------------------ #
# Global instance
# ------------------------------------------------------------------ #


class TestGlobalOutput:
    def test_get_output_creates_default(self, non_tty: None) -> None:
        reset_output()
        first = get_output()
        assert get_output() is first

    def test_set_output_is_used_by_helpers(self, capsys: pytest.CaptureFixture[str]) -> None:
        set_output(OutputManager(format=OutputFormat.JSON, no_color=True))
        output_module.print_table(["k"], [["v"]])
        output_module.error("nope")
        captured = capsys.readouterr()
        assert json.loads(captured.out) == [{"k": "v"}]
        assert "Error: nope" in captured.err

"""Shared test fixtures for hookpipe.

Provides config isolation, output reset, a CLI runner, and a recording
helper used by the executor and gateway tests to capture hook call order.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from hookpipe.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Drop the global OutputManager after every test.

    The manager keeps references to the streams it was created with, which
    CliRunner swaps out and closes.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the config directory at *tmp_path* and clear HOOKPIPE_* env vars.

    Returns:
        The temporary root directory.
    """
    monkeypatch.setattr("hookpipe.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for var in ["HOOKPIPE_LOG_LEVEL", "HOOKPIPE_DISABLED_PLUGINS"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def json_output() -> OutputManager:
    output = OutputManager(format=OutputFormat.JSON)
    set_output(output)
    yield output
    reset_output()


@pytest.fixture
def cli_runner():
    from typer.testing import CliRunner

    return CliRunner()


# ---------------------------------------------------------------------------
# Hook call recording
# ---------------------------------------------------------------------------


class Recorder:
    """Collects labels in call order; ``hook(label)`` builds a recording callback."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def hook(self, label: str, result: Any = None) -> Callable[..., Any]:
        def callback(context: Any, *args: Any) -> Any:
            self.calls.append(label)
            return result

        return callback

    def async_hook(self, label: str, result: Any = None) -> Callable[..., Any]:
        async def callback(context: Any, *args: Any) -> Any:
            self.calls.append(label)
            return result

        return callback


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()

"""Tests for the copilot-settings command line."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

from copilot_settings.__main__ import app

runner = CliRunner()


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "data.json"


def invoke(data_file: Path, *args: str):
    return runner.invoke(app, ["--data-file", str(data_file), *args])


def test_show_defaults_without_file(data_file):
    result = invoke(data_file, "show")
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "binaryPath": "default",
        "enabled": True,
        "hotkeys": {"accept": "Tab", "cancel": "Escape"},
    }
    assert not data_file.exists()


def test_set_path_persists(data_file):
    result = invoke(data_file, "set-path", "/opt/node/bin/node")
    assert result.exit_code == 0
    assert json.loads(data_file.read_text(encoding="utf-8"))["binaryPath"] == "/opt/node/bin/node"


def test_disable_then_enable(data_file):
    assert invoke(data_file, "disable").exit_code == 0
    assert json.loads(data_file.read_text(encoding="utf-8"))["enabled"] is False
    assert invoke(data_file, "enable").exit_code == 0
    assert json.loads(data_file.read_text(encoding="utf-8"))["enabled"] is True


def test_set_hotkey_keeps_other_fields(data_file):
    data_file.write_text(json.dumps({"nodePath": "/usr/bin/node"}), encoding="utf-8")

    result = invoke(data_file, "set-hotkey", "cancel", "Ctrl-G")

    assert result.exit_code == 0
    data = json.loads(data_file.read_text(encoding="utf-8"))
    assert data["binaryPath"] == "/usr/bin/node"
    assert data["hotkeys"] == {"accept": "Tab", "cancel": "Ctrl-G"}


def test_set_hotkey_rejects_unknown_name(data_file):
    result = invoke(data_file, "set-hotkey", "submit", "Enter")
    assert result.exit_code != 0
    assert not data_file.exists()


def test_corrupt_file_exits_with_code_2(data_file):
    data_file.write_text("{oops", encoding="utf-8")
    result = invoke(data_file, "show")
    assert result.exit_code == 2


def test_check_missing_binary_exits_1(data_file, tmp_path: Path):
    result = invoke(data_file, "check", "--path", str(tmp_path / "no-such-node"))
    assert result.exit_code == 1
    assert "Error while testing the binary path" in result.output


@pytest.mark.skipif(sys.platform == "win32", reason="uses a shell script as binary")
def test_check_configured_binary(data_file, tmp_path: Path):
    script = tmp_path / "node"
    script.write_text("#!/bin/sh\necho v16.20.2\n", encoding="utf-8")
    script.chmod(0o755)
    assert invoke(data_file, "set-path", str(script)).exit_code == 0

    result = invoke(data_file, "check")

    assert result.exit_code == 1
    assert "16.20.2 is not compatible" in result.output


def test_debug_writes_trace_file(data_file, tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["--data-file", str(data_file), "--debug", "show"])
    assert result.exit_code == 0

    trace = tmp_path / "copilot_settings_debug.log"
    assert trace.exists()
    assert "loaded settings" in trace.read_text(encoding="utf-8")

    # back to quiet mode; closes the trace file
    assert runner.invoke(app, ["--data-file", str(data_file), "show"]).exit_code == 0


@pytest.mark.parametrize("timeout", ["0", "-1"])
def test_check_rejects_non_positive_timeout(data_file, timeout):
    result = invoke(data_file, "check", "--path", "node", "--timeout", timeout)
    assert result.exit_code == 2

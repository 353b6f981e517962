"""Integration tests for CLI functionality."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

from tapcalc_pkg.cli import expand_terminal_keys, main_entry

ROOT = Path(__file__).resolve().parent.parent


def _run(*args):
    return subprocess.run(
        [sys.executable, "-m", "tapcalc_pkg.cli", *args],
        capture_output=True,
        text=True,
        timeout=30,
        cwd=ROOT,
    )


def test_cli_version():
    result = _run("--version")
    assert result.returncode == 0
    assert result.stdout.strip() != ""


def test_cli_health_check():
    result = _run("--health-check")
    assert result.returncode == 0
    assert "health check" in result.stdout.lower()


def test_cli_eval_human():
    result = _run("--eval", "2+3*4")
    assert result.returncode == 0
    assert result.stdout.strip() == "14"


def test_cli_eval_json():
    result = _run("--eval", "7/2", "--format", "json")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data == {"ok": True, "result": "3.5", "value": 3.5}


def test_cli_eval_failure():
    result = _run("--eval", "5/0", "--format", "json")
    assert result.returncode == 1
    assert json.loads(result.stdout)["error_code"] == "DIVISION_BY_ZERO"


def test_cli_keys_json():
    result = _run("--keys", "200+50%=", "--format", "json")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["display"] == "200.5"
    assert data["error"] is False
    assert data["history"] == [{"expression": "200+0.5", "result": "200.5"}]


def test_module_entry_point():
    result = subprocess.run(
        [sys.executable, "-m", "tapcalc_pkg", "-e", "2*3+4"],
        capture_output=True,
        text=True,
        timeout=30,
        cwd=ROOT,
    )
    assert result.returncode == 0
    assert result.stdout.strip() == "10"


class TestMainEntry:
    def test_eval(self, capsys):
        assert main_entry(["-e", "2×3+4"]) == 0
        assert capsys.readouterr().out.strip() == "10"

    def test_empty_eval(self, capsys):
        assert main_entry(["-e", "  "]) == 1
        assert "Empty input" in capsys.readouterr().out

    def test_keys_error_exit_code(self, capsys):
        assert main_entry(["--keys", "1/0="]) == 1
        assert capsys.readouterr().out.strip() == "Error"

    def test_keys_with_history(self, capsys):
        assert main_entry(["--keys", "2+2="]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["4", "History:", "2+2 = 4"]

    def test_history_size_override(self, capsys, monkeypatch):
        import tapcalc_pkg.config as config

        monkeypatch.setattr(config, "HISTORY_SIZE", 8)
        assert main_entry(["--history-size", "1", "--keys", "1+1=+1=", "--format", "json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["history"] == [{"expression": "2+1", "result": "3"}]


def test_expand_terminal_keys():
    assert expand_terminal_keys("5~ <c") == ["5", "±", "Backspace", "C"]


def test_repl_session(monkeypatch, capsys):
    lines = iter(["12+3=", "history", "5~", "clearhistory", "history", "quit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    assert main_entry([]) == 0
    out = capsys.readouterr().out
    assert "15\n" in out
    assert "12+3 = 15" in out
    assert "-155" in out
    assert "History cleared." in out
    assert "No calculations yet." in out


def test_repl_exits_on_eof(monkeypatch, capsys):
    def _eof(prompt=""):
        raise EOFError

    monkeypatch.setattr("builtins.input", _eof)
    assert main_entry([]) == 0
    assert "Goodbye." in capsys.readouterr().out


@pytest.mark.parametrize("command", ["help", "keypad"])
def test_repl_commands(monkeypatch, capsys, command):
    lines = iter([command, "exit"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(lines))
    assert main_entry([]) == 0
    out = capsys.readouterr().out
    assert "[ 7 ]" in out or "clearhistory" in out


def test_keys_toggle_lone_sign(capsys):
    assert main_entry(["--keys", "5~<~+"]) == 0
    assert capsys.readouterr().out.strip() == "0+"

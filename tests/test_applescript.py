import subprocess

import pytest

from chatgpt_mcp import applescript
from chatgpt_mcp.applescript import escape_string, make_runner, run_applescript
from chatgpt_mcp.errors import AppleScriptError


def test_escape_string_quotes_and_backslashes():
    assert escape_string('say "hi"') == 'say \\"hi\\"'
    assert escape_string("a\\b") == "a\\\\b"
    assert escape_string("plain") == "plain"


def test_run_applescript_feeds_script_on_stdin(monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        seen.update(kwargs)
        return subprocess.CompletedProcess(cmd, 0, stdout="true\n", stderr="")

    monkeypatch.setattr(applescript.subprocess, "run", fake_run)

    assert run_applescript('return "x"', timeout=3) == "true"
    assert seen["cmd"] == ["osascript", "-"]
    assert seen["input"] == 'return "x"'
    assert seen["timeout"] == 3


def test_run_applescript_nonzero_exit_raises_with_stderr(monkeypatch):
    def fake_run(cmd, **kwargs):
        return subprocess.CompletedProcess(cmd, 1, stdout="", stderr="execution error: nope (-1728)\n")

    monkeypatch.setattr(applescript.subprocess, "run", fake_run)

    with pytest.raises(AppleScriptError) as excinfo:
        run_applescript("bad")
    assert excinfo.value.message == "execution error: nope (-1728)"
    assert excinfo.value.returncode == 1


def test_run_applescript_missing_osascript(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr(applescript.subprocess, "run", fake_run)

    with pytest.raises(AppleScriptError, match="osascript not found"):
        run_applescript("return 1")


def test_make_runner_binds_timeout(monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"])

    monkeypatch.setattr(applescript.subprocess, "run", fake_run)

    with pytest.raises(AppleScriptError, match="timed out after 1.5s"):
        make_runner(1.5)("delay 10")


@pytest.mark.parametrize(
    "error",
    [
        PermissionError(13, "Permission denied"),
        UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte"),
    ],
)
def test_run_applescript_wraps_os_and_decode_errors(monkeypatch, error):
    def fake_run(cmd, **kwargs):
        raise error

    monkeypatch.setattr(applescript.subprocess, "run", fake_run)

    with pytest.raises(AppleScriptError, match="Could not run osascript"):
        run_applescript("return 1")

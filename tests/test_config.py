from pathlib import Path

import pytest

from chatgpt_mcp.config import DEFAULT_LOG_FILE, Settings
from chatgpt_mcp.locator import UILocator


def test_defaults():
    settings = Settings()
    assert settings.app_name == "ChatGPT"
    assert settings.ask_strategy == "keystroke"
    assert settings.launch_settle_delay == 2.0
    assert settings.log_file == DEFAULT_LOG_FILE
    assert settings.sidebar == UILocator("group 1 of group 1 of window 1")
    assert settings.script_timeout is None


def test_from_env_reads_variables(monkeypatch):
    monkeypatch.setenv("CHATGPT_ASK_STRATEGY", "Clipboard")
    monkeypatch.setenv("CHATGPT_GENERATION_WAIT_DELAY", "3.5")
    monkeypatch.setenv("CHATGPT_FOCUS_CLICK", "no")
    monkeypatch.setenv("CHATGPT_SCRIPT_TIMEOUT", "30")
    monkeypatch.setenv("CHATGPT_SIDEBAR_PATH", "group 2 of window 1")
    monkeypatch.setenv("CHATGPT_MCP_LOG_FILE", "/tmp/chatgpt-mcp.log")

    settings = Settings.from_env(dotenv=False)

    assert settings.ask_strategy == "clipboard"
    assert settings.generation_wait_delay == 3.5
    assert settings.focus_click is False
    assert settings.script_timeout == 30.0
    assert settings.sidebar.buttons() == "buttons of group 2 of window 1"
    assert settings.log_file == Path("/tmp/chatgpt-mcp.log")


def test_overrides_win_over_environment(monkeypatch):
    monkeypatch.setenv("CHATGPT_ASK_STRATEGY", "clipboard")
    monkeypatch.delenv("CHATGPT_MCP_LOG_FILE", raising=False)

    settings = Settings.from_env(dotenv=False, ask_strategy="keystroke", log_file=None)

    assert settings.ask_strategy == "keystroke"
    assert settings.log_file == DEFAULT_LOG_FILE


def test_unknown_strategy_rejected():
    with pytest.raises(ValueError, match="Unknown ask strategy"):
        Settings(ask_strategy="telepathy")


def test_blank_integer_variables_use_defaults(monkeypatch):
    monkeypatch.setenv("CHATGPT_INPUT_OFFSET", "")
    monkeypatch.setenv("CHATGPT_REPLY_TEXT_AREA", "  ")

    settings = Settings.from_env(dotenv=False)

    assert settings.input_offset == 60
    assert settings.reply_text_area == 2

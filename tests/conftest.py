from collections import deque
from typing import List

import pytest

from chatgpt_mcp.chatgpt import ChatGPTApp
from chatgpt_mcp.config import Settings


class FakeRunner:
    """Stands in for osascript: records scripts, replays queued results or raises queued errors."""

    def __init__(self, responses=()):
        self.responses = deque(responses)
        self.scripts: List[str] = []

    def __call__(self, script: str) -> str:
        self.scripts.append(script)
        if not self.responses:
            return ""
        result = self.responses.popleft()
        if isinstance(result, BaseException):
            raise result
        return result


class Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args[0] if len(args) == 1 else args)


def fast_settings(**overrides) -> Settings:
    values = dict(
        launch_settle_delay=0,
        activate_delay=0,
        conversation_click_delay=0,
        keystroke_submit_delay=0,
        reply_wait_delay=0,
        generation_wait_delay=0,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def make_app():
    """Build a ChatGPTApp wired to fakes; returns (app, runner, clicks, hotkeys, sleeps)."""
    def _make(responses=(), **settings_overrides):
        runner = FakeRunner(responses)
        clicks, hotkeys, sleeps = Recorder(), Recorder(), Recorder()
        app = ChatGPTApp(
            fast_settings(**settings_overrides),
            run_script=runner,
            click=clicks,
            hotkey=hotkeys,
            sleep=sleeps,
        )
        return app, runner, clicks, hotkeys, sleeps
    return _make

"""
Runtime settings, read from the environment (and a .env file if present).

Every wait the automation performs is a named delay here, so production can
tune them and tests can set them to zero.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from chatgpt_mcp.locator import DEFAULT_CONTAINER, UILocator

ASK_STRATEGIES = ("keystroke", "clipboard")
DEFAULT_LOG_FILE = Path(__file__).resolve().parent / "log.txt"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    return int(raw) if raw else default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    return raw in _TRUTHY if raw else default


@dataclass
class Settings:
    app_name: str = "ChatGPT"
    process_name: str = "ChatGPT"
    log_file: Path = DEFAULT_LOG_FILE
    ask_strategy: str = "keystroke"

    # Delays, in seconds
    launch_settle_delay: float = 2.0
    activate_delay: float = 1.0
    conversation_click_delay: float = 1.0
    keystroke_submit_delay: float = 0.5
    reply_wait_delay: float = 5.0
    generation_wait_delay: float = 10.0

    # Clipboard strategy: click this many pixels above the window's bottom edge
    input_offset: int = 60
    focus_click: bool = True

    script_timeout: Optional[float] = None

    sidebar: UILocator = field(default_factory=UILocator)
    reply: UILocator = field(default_factory=UILocator)
    reply_text_area: int = 2

    def __post_init__(self):
        if self.ask_strategy not in ASK_STRATEGIES:
            raise ValueError(
                f"Unknown ask strategy '{self.ask_strategy}'; expected one of {', '.join(ASK_STRATEGIES)}"
            )

    @classmethod
    def from_env(cls, dotenv: bool = True, **overrides) -> "Settings":
        """Build settings from CHATGPT_* environment variables, then apply overrides."""
        if dotenv:
            load_dotenv()

        timeout_raw = os.environ.get("CHATGPT_SCRIPT_TIMEOUT", "").strip()
        values = dict(
            app_name=os.environ.get("CHATGPT_APP_NAME", "ChatGPT"),
            process_name=os.environ.get("CHATGPT_PROCESS_NAME", "ChatGPT"),
            log_file=Path(os.environ.get("CHATGPT_MCP_LOG_FILE", str(DEFAULT_LOG_FILE))),
            ask_strategy=os.environ.get("CHATGPT_ASK_STRATEGY", "keystroke").strip().lower(),
            launch_settle_delay=_env_float("CHATGPT_LAUNCH_SETTLE_DELAY", 2.0),
            activate_delay=_env_float("CHATGPT_ACTIVATE_DELAY", 1.0),
            conversation_click_delay=_env_float("CHATGPT_CONVERSATION_CLICK_DELAY", 1.0),
            keystroke_submit_delay=_env_float("CHATGPT_KEYSTROKE_SUBMIT_DELAY", 0.5),
            reply_wait_delay=_env_float("CHATGPT_REPLY_WAIT_DELAY", 5.0),
            generation_wait_delay=_env_float("CHATGPT_GENERATION_WAIT_DELAY", 10.0),
            input_offset=_env_int("CHATGPT_INPUT_OFFSET", 60),
            focus_click=_env_bool("CHATGPT_FOCUS_CLICK", True),
            script_timeout=float(timeout_raw) if timeout_raw else None,
            sidebar=UILocator(os.environ.get("CHATGPT_SIDEBAR_PATH", DEFAULT_CONTAINER)),
            reply=UILocator(os.environ.get("CHATGPT_REPLY_PATH", DEFAULT_CONTAINER)),
            reply_text_area=_env_int("CHATGPT_REPLY_TEXT_AREA", 2),
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

"""
ChatGPT desktop app automation.

ChatGPTApp drives the macOS ChatGPT app through System Events:
  - ensure_available(): probe the process, launch it if absent
  - ask(): submit a prompt and return a reply (or a placeholder)
  - list_conversations(): read the sidebar's conversation button labels

Two ask strategies exist and are selected explicitly by settings.ask_strategy:
  keystroke (default): one AppleScript types the prompt, submits it, waits,
      then reads the reply text area back.
  clipboard: pastes the prompt through the clipboard with pyautogui hotkeys,
      waits, and returns a placeholder since nothing is read back.
"""

import logging
import time
from typing import Callable, List, Optional

from chatgpt_mcp import desktop
from chatgpt_mcp.applescript import ScriptRunner, escape_string, make_runner
from chatgpt_mcp.config import Settings
from chatgpt_mcp.errors import AccessError, InteractionError, LaunchError

logger = logging.getLogger("chatgpt_mcp.chatgpt")

NEW_CHAT_LABEL = "New chat"
LIST_SEPARATOR = ", "
NO_REPLY_TEXT = "Could not get a response from ChatGPT."
CONVERSATIONS_UNAVAILABLE = "Could not retrieve conversations"
CONVERSATIONS_ERROR = "Error retrieving conversations"
CLIPBOARD_PLACEHOLDER = (
    "Prompt sent to ChatGPT. The reply cannot be read back from the app window; "
    "check the ChatGPT app for the answer."
)


# ============================================
# APPLESCRIPT TEMPLATES
# ============================================

PROCESS_EXISTS_SCRIPT = """
tell application "System Events"
    return application process "{process}" exists
end tell
"""

ACTIVATE_SCRIPT = 'tell application "{app}" to activate'

FRONTMOST_SCRIPT = """
tell application "System Events"
    set frontmost of process "{process}" to true
end tell
"""

WINDOW_GEOMETRY_SCRIPT = """
tell application "System Events"
    tell process "{process}"
        set {{x, y}} to position of window 1
        set {{w, h}} to size of window 1
        return {{x, y, w, h}}
    end tell
end tell
"""

SET_CLIPBOARD_SCRIPT = 'set the clipboard to "{text}"'

SELECT_CONVERSATION_CLAUSE = """
            try
                click {button}
                delay {delay}
            end try
"""

KEYSTROKE_ASK_SCRIPT = """
tell application "{app}"
    activate
    delay {activate_delay}
    tell application "System Events"
        tell process "{process}"
{select_conversation}
            keystroke "{prompt}"
            delay {submit_delay}
            keystroke return
            delay {reply_wait}

            set responseText to ""
            try
                set responseText to value of {reply_area}
            on error
                set responseText to "{no_reply}"
            end try
            return responseText
        end tell
    end tell
end tell
"""

LIST_CONVERSATIONS_SCRIPT = """
tell application "{app}"
    activate
    delay {activate_delay}
    tell application "System Events"
        tell process "{process}"
            set conversationsList to {{}}
            try
                set chatButtons to {buttons}
                repeat with chatButton in chatButtons
                    set buttonName to name of chatButton
                    if buttonName is not "{new_chat}" then
                        set end of conversationsList to buttonName
                    end if
                end repeat
            on error
                set conversationsList to {{"{unavailable}"}}
            end try
            return conversationsList
        end tell
    end tell
end tell
"""


def parse_conversation_list(raw: str) -> List[str]:
    """
    Split osascript's list output back into labels.

    osascript joins list items with ", ", so a label that itself contains
    ", " comes back as two entries.
    """
    if not raw:
        return []
    return raw.split(LIST_SEPARATOR)


class ChatGPTApp:
    """Automation front for the ChatGPT desktop app. Holds no state between calls."""

    def __init__(
        self,
        settings: Settings,
        run_script: Optional[ScriptRunner] = None,
        click: Optional[Callable[[int, int], None]] = None,
        hotkey: Optional[Callable[[str], None]] = None,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.settings = settings
        self.run_script = run_script or make_runner(settings.script_timeout)
        self.click = click or desktop.click
        self.hotkey = hotkey or desktop.hotkey
        self.sleep = sleep or time.sleep

    # ============================================
    # AVAILABILITY
    # ============================================

    def ensure_available(self) -> None:
        """
        Make sure the ChatGPT process exists, launching the app if it does not.

        Raises AccessError if the probe fails and LaunchError if the single
        launch attempt fails.
        """
        s = self.settings
        try:
            running = self.run_script(PROCESS_EXISTS_SCRIPT.format(process=s.process_name))
        except Exception as exc:
            logger.error("ChatGPT access check failed: %s", exc)
            raise AccessError(
                f"Cannot access the ChatGPT app. Make sure ChatGPT is installed and "
                f"configured. Error: {exc}"
            )

        if running == "true":
            return

        logger.info("ChatGPT is not running, launching it...")
        try:
            self.run_script(ACTIVATE_SCRIPT.format(app=s.app_name))
        except Exception as exc:
            logger.error("Error launching ChatGPT: %s", exc)
            raise LaunchError(f"Could not launch the ChatGPT app. Please start it manually. Error: {exc}")
        self.sleep(s.launch_settle_delay)

    # ============================================
    # ASK
    # ============================================

    def ask(self, prompt: str, conversation_id: Optional[str] = None) -> str:
        """Send prompt to ChatGPT using the configured strategy and return the reply text."""
        self.ensure_available()

        try:
            if self.settings.ask_strategy == "clipboard":
                return self._ask_via_clipboard(prompt, conversation_id)
            return self._ask_via_keystrokes(prompt, conversation_id)
        except Exception as exc:
            logger.error("Error interacting with ChatGPT: %s", exc)
            raise InteractionError(f"Could not get a response from ChatGPT: {exc}")

    def _ask_via_keystrokes(self, prompt: str, conversation_id: Optional[str]) -> str:
        s = self.settings
        select_conversation = ""
        if conversation_id:
            select_conversation = SELECT_CONVERSATION_CLAUSE.format(
                button=s.sidebar.button(conversation_id),
                delay=s.conversation_click_delay,
            )

        script = KEYSTROKE_ASK_SCRIPT.format(
            app=s.app_name,
            process=s.process_name,
            activate_delay=s.activate_delay,
            select_conversation=select_conversation,
            prompt=escape_string(prompt),
            submit_delay=s.keystroke_submit_delay,
            reply_wait=s.reply_wait_delay,
            reply_area=s.reply.text_area(s.reply_text_area),
            no_reply=NO_REPLY_TEXT,
        )
        return self.run_script(script)

    def _ask_via_clipboard(self, prompt: str, conversation_id: Optional[str]) -> str:
        s = self.settings
        if conversation_id:
            logger.info("Clipboard strategy ignores conversation_id %r", conversation_id)

        self.run_script(ACTIVATE_SCRIPT.format(app=s.app_name))
        self.sleep(s.activate_delay)

        self.run_script(SET_CLIPBOARD_SCRIPT.format(text=escape_string(prompt)))
        self.run_script(FRONTMOST_SCRIPT.format(process=s.process_name))

        if s.focus_click:
            rect = desktop.parse_window_rect(
                self.run_script(WINDOW_GEOMETRY_SCRIPT.format(process=s.process_name))
            )
            x, y = desktop.input_point(rect, s.input_offset)
            self.click(x, y)

        # Clear stale input, paste, submit
        self.hotkey("command+a")
        self.hotkey("delete")
        self.hotkey("command+v")
        self.hotkey("enter")

        self.sleep(s.generation_wait_delay)
        return CLIPBOARD_PLACEHOLDER

    # ============================================
    # CONVERSATIONS
    # ============================================

    def list_conversations(self) -> List[str]:
        """
        Return the sidebar's conversation labels, minus "New chat".

        Any script failure degrades to a one-element sentinel list; only the
        availability check can raise.
        """
        self.ensure_available()

        s = self.settings
        script = LIST_CONVERSATIONS_SCRIPT.format(
            app=s.app_name,
            process=s.process_name,
            activate_delay=s.activate_delay,
            buttons=s.sidebar.buttons(),
            new_chat=NEW_CHAT_LABEL,
            unavailable=CONVERSATIONS_UNAVAILABLE,
        )
        try:
            raw = self.run_script(script)
        except Exception as exc:
            logger.error("Error getting ChatGPT conversations: %s", exc)
            return [CONVERSATIONS_ERROR]

        return [label for label in parse_conversation_list(raw) if label != NEW_CHAT_LABEL]

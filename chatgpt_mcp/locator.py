"""UI locators: AppleScript element addresses inside the ChatGPT window."""

from dataclasses import dataclass

from chatgpt_mcp.applescript import escape_string

DEFAULT_CONTAINER = "group 1 of group 1 of window 1"


@dataclass(frozen=True)
class UILocator:
    """
    An ordinal container path such as "group 1 of group 1 of window 1".

    The ChatGPT app exposes no stable identifiers, so elements are reached
    by position. When the app's layout changes, only the container string
    needs updating.
    """

    container: str = DEFAULT_CONTAINER

    def buttons(self) -> str:
        return f"buttons of {self.container}"

    def button(self, label: str) -> str:
        return f'button "{escape_string(label)}" of {self.container}'

    def text_area(self, index: int) -> str:
        return f"text area {index} of {self.container}"

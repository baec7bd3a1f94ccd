"""
Pointer and keyboard input for the clipboard ask strategy, via pyautogui.

pyautogui is imported on first use: importing it needs a live display
session, which the MCP server only has when it actually drives the app.
"""

from typing import Dict, List, Tuple

_pyautogui = None


def _gui():
    """Import and configure pyautogui once."""
    global _pyautogui
    if _pyautogui is None:
        import pyautogui

        # Safety: move mouse to (0,0) to abort
        pyautogui.FAILSAFE = True
        # Don't pause between actions (we manage our own waits)
        pyautogui.PAUSE = 0.05
        _pyautogui = pyautogui
    return _pyautogui


# ============================================
# WINDOW GEOMETRY
# ============================================

def parse_window_rect(raw: str) -> Dict[str, int]:
    """
    Parse osascript's "x, y, w, h" reply for {position, size} of a window.

    Raises ValueError if the reply does not hold exactly four integers.
    """
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 4:
        raise ValueError(f"Unexpected window geometry: {raw!r}")
    left, top, width, height = (int(float(p)) for p in parts)
    return {
        "left": left,
        "top": top,
        "right": left + width,
        "bottom": top + height,
        "width": width,
        "height": height,
    }


def input_point(rect: Dict[str, int], offset: int) -> Tuple[int, int]:
    """Bottom-centre of the window, raised by offset pixels: where the prompt box sits."""
    return rect["left"] + rect["width"] // 2, rect["top"] + rect["height"] - offset


# ============================================
# POINTER & KEYBOARD
# ============================================

# Common key names → pyautogui key names (macOS modifiers included)
KEY_MAP = {
    "cmd": "command",
    "command": "command",
    "ctrl": "ctrl",
    "control": "ctrl",
    "alt": "option",
    "option": "option",
    "shift": "shift",
    "enter": "enter",
    "return": "enter",
    "tab": "tab",
    "esc": "escape",
    "escape": "escape",
    "space": "space",
    "backspace": "backspace",
    "delete": "delete",
    "del": "delete",
}


def parse_keys(keys: str) -> List[str]:
    """Parse a key combo: "command+a" → ["command", "a"], "enter" → ["enter"]."""
    parts = [k.strip().lower() for k in keys.split("+") if k.strip()]
    return [KEY_MAP.get(k, k) for k in parts]


def click(x: int, y: int) -> None:
    """Perform a mouse click at screen coordinates."""
    _gui().click(x, y)


def hotkey(keys: str) -> None:
    """Send a key or key combo such as "command+v"."""
    mapped = parse_keys(keys)
    if not mapped:
        raise ValueError("No keys provided")

    gui = _gui()
    if len(mapped) == 1:
        gui.press(mapped[0])
    else:
        gui.hotkey(*mapped)

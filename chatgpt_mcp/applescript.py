"""
Scripting engine: runs AppleScript programs through osascript.

Every query and action against the ChatGPT app (process checks, window
geometry, clipboard writes, keystrokes, UI element reads) goes through
run_applescript(). Scripts are fed on stdin so multi-line programs need no
shell quoting.
"""

import subprocess
from typing import Callable, Optional

from chatgpt_mcp.errors import AppleScriptError

OSASCRIPT = "osascript"

# Signature shared by run_applescript and the test fakes.
ScriptRunner = Callable[[str], str]


def escape_string(text: str) -> str:
    """Escape text for use inside an AppleScript double-quoted literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def run_applescript(script: str, timeout: Optional[float] = None) -> str:
    """
    Run an AppleScript program and return its stripped stdout.

    Raises AppleScriptError carrying osascript's stderr when the script
    fails, when osascript is not installed, or when the timeout expires.
    """
    try:
        result = subprocess.run(
            [OSASCRIPT, "-"],
            input=script,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError:
        raise AppleScriptError(f"{OSASCRIPT} not found; AppleScript automation requires macOS")
    except subprocess.TimeoutExpired:
        raise AppleScriptError(f"AppleScript timed out after {timeout}s")
    except (OSError, UnicodeDecodeError) as exc:
        raise AppleScriptError(f"Could not run {OSASCRIPT}: {exc}")

    if result.returncode != 0:
        message = (result.stderr or "").strip() or f"{OSASCRIPT} exited with code {result.returncode}"
        raise AppleScriptError(message, returncode=result.returncode)

    return (result.stdout or "").strip()


def make_runner(timeout: Optional[float] = None) -> ScriptRunner:
    """Bind a timeout into a single-argument script runner."""
    def _run(script: str) -> str:
        return run_applescript(script, timeout=timeout)
    return _run

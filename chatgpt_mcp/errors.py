"""Failure taxonomy for the ChatGPT MCP tool."""
from typing import Optional


class ChatGPTMCPError(Exception):
    """Base exception for the ChatGPT MCP tool."""

    def __init__(self, message: str, error_code: str = "INTERNAL_ERROR"):
        self.message = message
        self.error_code = error_code
        super().__init__(self.message)


class ValidationError(ChatGPTMCPError):
    """Raised when a tool request has the wrong shape."""

    def __init__(self, message: str):
        super().__init__(message, "VALIDATION_ERROR")


class AccessError(ChatGPTMCPError):
    """Raised when the availability probe itself fails."""

    def __init__(self, message: str):
        super().__init__(message, "ACCESS_ERROR")


class LaunchError(ChatGPTMCPError):
    """Raised when ChatGPT is not running and could not be launched."""

    def __init__(self, message: str):
        super().__init__(message, "LAUNCH_ERROR")


class InteractionError(ChatGPTMCPError):
    """Raised when an ask automation script fails."""

    def __init__(self, message: str):
        super().__init__(message, "INTERACTION_ERROR")


class AppleScriptError(ChatGPTMCPError):
    """Raised when osascript exits non-zero, is missing, or times out."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        self.returncode = returncode
        super().__init__(message, "APPLESCRIPT_ERROR")

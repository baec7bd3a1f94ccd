"""
File logging for the MCP server.

stdout carries the MCP protocol, so log records only ever go to an
append-only file, one "[<ISO-8601 timestamp>] <message>" line per event.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

LOGGER_NAME = "chatgpt_mcp"

logger = logging.getLogger(LOGGER_NAME)

_handler: Optional[logging.Handler] = None


class IsoFormatter(logging.Formatter):
    """Render records as '[2024-01-01T00:00:00.000+00:00] message'."""

    def __init__(self):
        super().__init__("[%(asctime)s] %(message)s")

    def formatTime(self, record, datefmt=None):
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return stamp.isoformat(timespec="milliseconds")


def setup_logging(path: Union[str, Path], level: int = logging.INFO) -> logging.Handler:
    """Open the log file and attach it to the package logger. Replaces any earlier handler."""
    global _handler
    shutdown_logging()

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    handler.setFormatter(IsoFormatter())
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    _handler = handler
    return handler


def shutdown_logging() -> None:
    """Flush, close and detach the file handler opened by setup_logging()."""
    global _handler
    if _handler is None:
        return
    logger.removeHandler(_handler)
    _handler.flush()
    _handler.close()
    _handler = None
    logger.propagate = True

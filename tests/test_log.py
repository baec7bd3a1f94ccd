import logging
import re

from chatgpt_mcp import log

LINE = re.compile(r"^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}\+00:00\] (.*)$")


def test_lines_are_timestamped_and_appended(tmp_path):
    path = tmp_path / "logs" / "log.txt"

    log.setup_logging(path)
    logging.getLogger("chatgpt_mcp.chatgpt").info("ChatGPT is not running, launching it...")
    log.shutdown_logging()

    log.setup_logging(path)
    logging.getLogger("chatgpt_mcp.server").error("second run")
    log.shutdown_logging()

    lines = path.read_text(encoding="utf-8").splitlines()
    assert [LINE.match(line).group(1) for line in lines] == [
        "ChatGPT is not running, launching it...",
        "second run",
    ]


def test_shutdown_detaches_handler(tmp_path):
    handler = log.setup_logging(tmp_path / "log.txt")
    assert handler in log.logger.handlers
    assert log.logger.propagate is False

    log.shutdown_logging()

    assert handler not in log.logger.handlers
    assert log.logger.propagate is True
    # Second shutdown is a no-op
    log.shutdown_logging()

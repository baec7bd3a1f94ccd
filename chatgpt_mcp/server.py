"""
ChatGPT MCP server: exposes the `chatgpt` tool over stdio.

Supports both the MCP stdio server (default) and a one-shot debug mode
(--tool/--args) that runs a single call and prints the JSON envelope.

Usage:
  chatgpt-mcp
  chatgpt-mcp --tool chatgpt --args '{"operation":"get_conversations"}'
"""

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

import anyio
import anyio.to_thread
import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from chatgpt_mcp import __version__
from chatgpt_mcp.chatgpt import ChatGPTApp
from chatgpt_mcp.config import ASK_STRATEGIES, Settings
from chatgpt_mcp.log import setup_logging, shutdown_logging
from chatgpt_mcp.router import CHATGPT_TOOL, ToolRouter

logger = logging.getLogger("chatgpt_mcp.server")

SERVER_NAME = "ChatGPT MCP Tool"


def create_server(router: ToolRouter) -> Server:
    """
    Build the MCP server with list-tools and call-tool handlers.

    Handlers are registered directly rather than through the decorators so
    that tool calls reach the router untouched: a missing `arguments` stays
    None, and the router owns validation and the isError envelope.
    """
    server = Server(SERVER_NAME, version=__version__)
    # The desktop app is one shared UI; never drive it from two calls at once.
    lock = anyio.Lock()

    async def list_tools(req: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=[CHATGPT_TOOL]))

    async def call_tool(req: types.CallToolRequest) -> types.ServerResult:
        async with lock:
            response = await anyio.to_thread.run_sync(
                router.handle, req.params.name, req.params.arguments
            )
        return types.ServerResult(response.to_result())

    server.request_handlers[types.ListToolsRequest] = list_tools
    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve(router: ToolRouter) -> None:
    """Run the MCP server on stdin/stdout until the client disconnects."""
    server = create_server(router)
    async with stdio_server() as (read_stream, write_stream):
        logger.info("ChatGPT MCP server running on stdio")
        await server.run(read_stream, write_stream, server.create_initialization_options())


def run_oneshot(router: ToolRouter, tool: str, raw_args: str) -> int:
    """Single tool call from the command line. Returns the process exit code."""
    try:
        args = json.loads(raw_args)
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON args: {e}"}))
        return 1

    response = router.handle(tool, args)
    print(json.dumps(response.to_dict(), ensure_ascii=False))
    return 1 if response.is_error else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chatgpt-mcp",
        description="MCP server for the ChatGPT desktop app on macOS",
    )
    parser.add_argument("--tool", help="Run a single tool call (e.g., chatgpt) and exit")
    parser.add_argument("--args", default="{}", help="JSON-encoded arguments for --tool")
    parser.add_argument("--log-file", help="Log file path (default: log.txt beside the package)")
    parser.add_argument("--ask-strategy", choices=ASK_STRATEGIES, help="How prompts are submitted")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parsed = build_parser().parse_args(argv)
    settings = Settings.from_env(log_file=parsed.log_file, ask_strategy=parsed.ask_strategy)

    setup_logging(settings.log_file)
    try:
        router = ToolRouter(ChatGPTApp(settings))
        if parsed.tool:
            return run_oneshot(router, parsed.tool, parsed.args)
        anyio.run(serve, router)
        return 0
    finally:
        shutdown_logging()


if __name__ == "__main__":
    sys.exit(main())

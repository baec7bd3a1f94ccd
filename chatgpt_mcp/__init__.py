"""MCP server that lets an agent talk to the ChatGPT desktop app on macOS."""

__version__ = "1.0.0"

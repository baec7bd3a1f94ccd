"""
Tool request routing: validate, dispatch, and wrap every outcome.

ToolRouter.handle() is total. Whatever happens inside (bad arguments,
a missing app, a failing script) the caller gets a ToolResponse back.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import mcp.types as types

from chatgpt_mcp.chatgpt import ChatGPTApp
from chatgpt_mcp.errors import ChatGPTMCPError, ValidationError

logger = logging.getLogger("chatgpt_mcp.router")

TOOL_NAME = "chatgpt"
OPERATIONS = ("ask", "get_conversations")

CHATGPT_TOOL = types.Tool(
    name=TOOL_NAME,
    description="Interact with the ChatGPT desktop app on macOS",
    inputSchema={
        "type": "object",
        "properties": {
            "operation": {
                "type": "string",
                "description": "Operation to perform: 'ask' or 'get_conversations'",
                "enum": list(OPERATIONS),
            },
            "prompt": {
                "type": "string",
                "description": "The prompt to send to ChatGPT (required for ask operation)",
            },
            "conversation_id": {
                "type": "string",
                "description": "Optional conversation ID to continue a specific conversation",
            },
        },
        "required": ["operation"],
    },
)


@dataclass
class ToolResponse:
    """The {content: [{type: "text", text}], isError} envelope, always one text block."""

    text: str
    is_error: bool = False

    @property
    def content(self) -> List[Dict[str, str]]:
        return [{"type": "text", "text": self.text}]

    def to_dict(self) -> Dict[str, Any]:
        return {"content": self.content, "isError": self.is_error}

    def to_result(self) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )


def is_chatgpt_args(args: Any) -> bool:
    """Check that args is a well-formed chatgpt tool request."""
    if not isinstance(args, Mapping):
        return False

    operation = args.get("operation")
    prompt = args.get("prompt")
    conversation_id = args.get("conversation_id")

    if operation not in OPERATIONS:
        return False
    if operation == "ask" and not prompt:
        return False
    if prompt is not None and not isinstance(prompt, str):
        return False
    if conversation_id is not None and not isinstance(conversation_id, str):
        return False
    return True


def format_conversations(conversations: List[str]) -> str:
    if not conversations:
        return "No conversations found in ChatGPT."
    return f"Found {len(conversations)} conversations:\n\n" + "\n".join(conversations)


class ToolRouter:
    """Routes call-tool requests for the chatgpt tool to a ChatGPTApp."""

    def __init__(self, app: ChatGPTApp):
        self.app = app

    def handle(self, name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResponse:
        """Run one tool call. Never raises; failures come back with is_error set."""
        try:
            if arguments is None:
                raise ValidationError("No arguments provided")

            if name != TOOL_NAME:
                return ToolResponse(f"Unknown tool: {name}", is_error=True)

            if not is_chatgpt_args(arguments):
                raise ValidationError("Invalid arguments for chatgpt tool")

            return self._dispatch(arguments)
        except ChatGPTMCPError as exc:
            return ToolResponse(f"Error: {exc.message}", is_error=True)
        except Exception as exc:
            logger.error("Unexpected error handling %s: %s", name, exc, exc_info=True)
            return ToolResponse(f"Error: {exc}", is_error=True)

    def _dispatch(self, args: Mapping[str, Any]) -> ToolResponse:
        operation = args["operation"]

        if operation == "ask":
            reply = self.app.ask(args["prompt"], args.get("conversation_id"))
            return ToolResponse(reply or "No response received from ChatGPT.")

        if operation == "get_conversations":
            return ToolResponse(format_conversations(self.app.list_conversations()))

        raise ValidationError(f"Unknown operation: {operation}")

# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server (both Telegram tools)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the two Telegram tools over MCP.  "list tools" serves the
#   descriptors from core/registry.py exactly as written, and every
#   "call tool" request is answered by core.dispatcher, whatever its name or
#   arguments.
#
# HOW IT WORKS (the flow):
#   1. The agent host lists tools and gets telegram_send_message and
#      telegram_set_message_reaction with the registry's JSON schemas
#   2. It calls one by name via MCP
#   3. DispatcherMiddleware takes the call before FastMCP looks the name up
#      or checks any arguments, and passes (name, arguments) to dispatch()
#   4. The dispatcher talks to Telegram and builds the
#      {"content": [{"type": "text", ...}]} envelope
#   5. The text block (Telegram's JSON reply, or {"error": ...}) goes back
#
# PROCESS-WIDE STATE:
#   The settings and the TelegramClient live in one AppContext, built in
#   main() and passed to build_server().  There is no module-level client.
#
# RUNNING THIS SERVER:
#   a) Standalone:       python -m tools.mcp_server
#   b) Console script:   telegram-mcp-server
#   c) As a subprocess of the Google ADK agent (agent/telegram_agent.py)
# =============================================================================

import copy
import logging
import sys
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.server.middleware import CallNext, Middleware, MiddlewareContext
from fastmcp.tools import Tool, ToolResult
from mcp.types import CallToolRequestParams, TextContent
from pydantic import PrivateAttr

from core.config import load_settings
from core.dispatcher import AppContext, dispatch
from core.errors import ConfigurationError
from core.models import ToolDescriptor
from core.registry import list_tools

SERVER_NAME = "Telegram MCP Server"
SERVER_VERSION = "1.0.0"

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT carries the MCP JSON stream, so every log line goes to STDERR.
#
# ANSI COLOR CODES:
#     - CYAN for incoming tool calls (tool name + arguments)
#     - GREEN for the text block sent back
#     - YELLOW for intermediate status messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

# httpx logs every request URL at INFO, and the URL contains the bot token.
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


def _log_request(tool_name: str, params: Optional[Mapping[str, Any]]) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in (params or {}).items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, text: str) -> str:
    """Log the text block in GREEN, then return it."""
    logger.info(f"{_GREEN}  ← {tool_name} response: {text}{_RESET}")
    return text


async def _run(
    context: AppContext, name: str, arguments: Optional[Mapping[str, Any]]
) -> ToolResult:
    """Forward one call to the dispatcher and wrap its single text block."""
    _log_request(name, arguments)
    # MCP hosts send {} when a call has no arguments; both mean no bag.
    outcome = await dispatch(context, name, arguments or None)
    if outcome.failed:
        _log_status("Tool call failed; returning error block")
    text = _log_response(name, outcome.text)
    # Failures travel as ordinary text blocks; is_error is never set.
    return ToolResult(content=[TextContent(type="text", text=text)])


# -----------------------------------------------------------------------------
# TelegramTool - a registry descriptor served as-is on "list tools"
# -----------------------------------------------------------------------------
class TelegramTool(Tool):
    """One Telegram tool, listed with the registry's own input schema.

    FastMCP does not derive or validate a schema for it: ``run`` hands the raw
    argument bag straight to the dispatcher.
    """

    _app_context: AppContext = PrivateAttr()

    @classmethod
    def from_descriptor(cls, descriptor: ToolDescriptor, context: AppContext) -> "TelegramTool":
        tool = cls(
            name=descriptor.name,
            description=descriptor.description,
            parameters=copy.deepcopy(descriptor.input_schema),
        )
        tool._app_context = context
        return tool

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        return await _run(self._app_context, self.name, arguments)


# -----------------------------------------------------------------------------
# DispatcherMiddleware - answers every tools/call
# -----------------------------------------------------------------------------
class DispatcherMiddleware(Middleware):
    """Send every tools/call to the dispatcher, whatever the name or arguments.

    FastMCP would otherwise reject unknown names itself before any tool runs.
    The call_next chain is never invoked.
    """

    def __init__(self, context: AppContext):
        self.app_context = context

    async def on_call_tool(
        self,
        context: MiddlewareContext[CallToolRequestParams],
        call_next: CallNext[CallToolRequestParams, ToolResult],
    ) -> ToolResult:
        message = context.message
        return await _run(self.app_context, message.name, message.arguments)


def build_server(context: AppContext) -> FastMCP:
    """Create the FastMCP server with both Telegram tools bound to context."""
    mcp = FastMCP(
        SERVER_NAME,
        version=SERVER_VERSION,
        middleware=[DispatcherMiddleware(context)],
    )

    # TOOL 1: telegram_send_message
    # TOOL 2: telegram_set_message_reaction
    for descriptor in list_tools():
        mcp.add_tool(TelegramTool.from_descriptor(descriptor, context))

    return mcp


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    load_dotenv()

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        logger.error(exc.message)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    logger.info(f"Starting {SERVER_NAME}...")

    server = build_server(AppContext.from_settings(settings))
    logger.info(f"{SERVER_NAME} running on stdio")
    server.run()


if __name__ == "__main__":
    main()

# =============================================================================
# core/errors.py  -  Exception taxonomy
# =============================================================================
#
# Three kinds of failure exist in this system:
#
#   (a) ConfigurationError  - the bot token is missing.  Fatal at startup.
#   (b) ToolCallError       - the tool call itself is malformed (no
#                             arguments, unknown tool name).  The dispatcher
#                             turns it into an error envelope.
#   (c) remote failures     - httpx.HTTPError or a non-JSON body.  These are
#                             not wrapped; the dispatcher catches them at its
#                             boundary like any other exception.
# =============================================================================

from typing import Optional


class TelegramMCPError(Exception):
    """Base exception for this package."""

    def __init__(self, message: str, tool_name: Optional[str] = None):
        self.message = message
        self.tool_name = tool_name
        super().__init__(self.message)


class ConfigurationError(TelegramMCPError):
    """Raised when required settings are missing from the environment."""


class ToolCallError(TelegramMCPError):
    """Raised when a tool call cannot be dispatched."""


class MissingArgumentsError(ToolCallError):
    def __init__(self, tool_name: Optional[str] = None):
        super().__init__("No arguments provided", tool_name=tool_name)


class UnknownToolError(ToolCallError):
    def __init__(self, tool_name: str):
        super().__init__(f"Unknown Telegram tool: {tool_name}", tool_name=tool_name)

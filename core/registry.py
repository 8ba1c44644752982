# =============================================================================
# core/registry.py  -  Static tool registry
# =============================================================================
#
# The two tool descriptors served on "list tools".  They are defined once at
# import time and never change; list_tools() is a pure accessor.
#
# The descriptions are what the LLM reads to decide WHEN to call a tool, and
# the schemas tell the host WHAT to pass.  The host enforces the schemas;
# nothing in this package re-validates arguments against them.
# =============================================================================

from typing import Optional

from core.models import PARSE_MODES, REACTION_EMOJIS, ToolDescriptor, ToolName

_CHAT_ID_DESCRIPTION = (
    "Unique identifier for the target chat or username of the target channel "
    "(in the format @channelusername)"
)


SEND_MESSAGE_TOOL = ToolDescriptor(
    name=ToolName.SEND_MESSAGE.value,
    description="Sends a text message",
    input_schema={
        "type": "object",
        "properties": {
            "chat_id": {
                "type": "string",
                "description": _CHAT_ID_DESCRIPTION,
            },
            "text": {
                "type": "string",
                "description": "Text of the message to be sent",
            },
            "parse_mode": {
                "type": "string",
                "description": "Mode for parsing entities in the message text",
                "enum": list(PARSE_MODES),
            },
        },
        "required": ["chat_id", "text"],
    },
)


SET_MESSAGE_REACTION_TOOL = ToolDescriptor(
    name=ToolName.SET_MESSAGE_REACTION.value,
    description="Sets or updates a reaction to a message",
    input_schema={
        "type": "object",
        "properties": {
            "chat_id": {
                "type": "string",
                "description": _CHAT_ID_DESCRIPTION,
            },
            "message_id": {
                "type": "number",
                "description": "Identifier of the target message",
            },
            "reaction": {
                "type": "object",
                "properties": {
                    "type": {"type": "string", "enum": ["emoji"]},
                    "emoji": {"type": "string", "enum": list(REACTION_EMOJIS)},
                },
                "description": "Reaction to set",
            },
            "is_big": {
                "type": "boolean",
                "description": "Pass `true` to set the reaction with a big animation",
            },
        },
        "required": ["chat_id", "message_id"],
    },
)


_TOOLS: tuple[ToolDescriptor, ...] = (SEND_MESSAGE_TOOL, SET_MESSAGE_REACTION_TOOL)


def list_tools() -> list[ToolDescriptor]:
    """Return the fixed list of tool descriptors."""
    return list(_TOOLS)


def get_tool(name: str) -> Optional[ToolDescriptor]:
    """Look up a descriptor by exact name; None if unknown."""
    for tool in _TOOLS:
        if tool.name == name:
            return tool
    return None

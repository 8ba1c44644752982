# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the *shape* of everything that flows through a
# tool call: the closed set of tool names, the argument bag of each tool,
# the tool descriptor served on "list tools", and the response envelope.
#
# THE CLOSED TOOL SET:
#   There are exactly two tools.  ToolName enumerates them and each one has
#   its own argument dataclass, so the dispatcher can branch on the parsed
#   kind instead of looking up handlers by string.
#
# NO VALIDATION HERE:
#   The JSON schema for each tool is enforced by the MCP host.  The
#   from_arguments() constructors only *cast* the raw argument bag; a missing
#   required key is reported, everything else is passed through as-is.
# =============================================================================

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal, Mapping, Optional, Union

from core.errors import ToolCallError


# -----------------------------------------------------------------------------
# ToolName - the two tools this server exposes
# -----------------------------------------------------------------------------
class ToolName(str, Enum):
    SEND_MESSAGE = "telegram_send_message"
    SET_MESSAGE_REACTION = "telegram_set_message_reaction"


ParseMode = Literal["MarkdownV2", "HTML"]
PARSE_MODES: tuple[str, ...] = ("MarkdownV2", "HTML")


# -----------------------------------------------------------------------------
# REACTION_EMOJIS - emoji accepted by the Bot API for ReactionTypeEmoji
# -----------------------------------------------------------------------------
# Sequences joined with U+200D (ZERO WIDTH JOINER) are written as escapes so
# the joiner survives editors that strip invisible characters.
# -----------------------------------------------------------------------------
REACTION_EMOJIS: tuple[str, ...] = (
    "👍", "👎", "❤", "🔥", "🥰", "👏", "😁", "🤔", "🤯", "😱",
    "🤬", "😢", "🎉", "🤩", "🤮", "💩", "🙏", "👌", "🕊", "🤡",
    "🥱", "🥴", "😍", "🐳", "\u2764\u200d\U0001f525", "🌚", "🌭", "💯", "🤣", "⚡",
    "🍌", "🏆", "💔", "🤨", "😐", "🍓", "🍾", "💋", "🖕", "😈",
    "😴", "😭", "🤓", "👻", "\U0001f468\u200d\U0001f4bb", "👀", "🎃", "🙈", "😇", "😨",
    "🤝", "✍", "🤗", "🫡", "🎅", "🎄", "☃", "💅", "🤪", "🗿",
    "🆒", "💘", "🙉", "🦄", "😘", "💊", "🙊", "😎", "👾", "\U0001f937\u200d\u2642",
    "🤷", "\U0001f937\u200d\u2640", "😡",
)

ReactionEmoji = Literal[REACTION_EMOJIS]


def to_json(value: Any) -> str:
    """Serialize compactly, leaving emoji and other non-ASCII text as-is."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _require(arguments: Mapping[str, Any], key: str, tool_name: ToolName) -> Any:
    if key not in arguments or arguments[key] is None:
        raise ToolCallError(f"Missing required argument: {key}", tool_name=tool_name.value)
    return arguments[key]


def _message_id(value: Any) -> Any:
    # JSON numbers can arrive as floats; 45.0 is still message "45".
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# -----------------------------------------------------------------------------
# SendMessageArguments - argument bag of telegram_send_message
# -----------------------------------------------------------------------------
@dataclass
class SendMessageArguments:
    chat_id: str                       # Numeric id or "@channelusername"
    text: str                          # Message body
    parse_mode: Optional[ParseMode] = None

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "SendMessageArguments":
        tool = ToolName.SEND_MESSAGE
        return cls(
            chat_id=str(_require(arguments, "chat_id", tool)),
            text=str(_require(arguments, "text", tool)),
            parse_mode=arguments.get("parse_mode") or None,
        )


# -----------------------------------------------------------------------------
# ReactionTypeEmoji / SetMessageReactionArguments
# -----------------------------------------------------------------------------
@dataclass
class ReactionTypeEmoji:
    emoji: str
    type: Literal["emoji"] = "emoji"

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type, "emoji": self.emoji}

    @classmethod
    def from_value(cls, value: Any) -> Optional["ReactionTypeEmoji"]:
        """Accept a {"type", "emoji"} mapping, a bare emoji string, or None."""
        if not value:
            return None
        if isinstance(value, ReactionTypeEmoji):
            return value
        if isinstance(value, str):
            return cls(emoji=value)
        return cls(emoji=value["emoji"], type=value.get("type", "emoji"))


@dataclass
class SetMessageReactionArguments:
    chat_id: str
    message_id: Union[int, float, str]  # Sent as given, never truncated
    reaction: Optional[ReactionTypeEmoji] = None
    is_big: Optional[bool] = None      # Big animation flag, sent only if given

    @classmethod
    def from_arguments(cls, arguments: Mapping[str, Any]) -> "SetMessageReactionArguments":
        tool = ToolName.SET_MESSAGE_REACTION
        is_big = arguments.get("is_big")
        return cls(
            chat_id=str(_require(arguments, "chat_id", tool)),
            message_id=_message_id(_require(arguments, "message_id", tool)),
            reaction=ReactionTypeEmoji.from_value(arguments.get("reaction")),
            is_big=None if is_big is None else bool(is_big),
        )


ToolArguments = Union[SendMessageArguments, SetMessageReactionArguments]


# -----------------------------------------------------------------------------
# ToolDescriptor - one entry of the "list tools" response
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDescriptor:
    """Name, description and JSON Schema of one tool."""

    name: str
    description: str
    input_schema: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        # MCP spells the schema key in camelCase
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }


# -----------------------------------------------------------------------------
# Tool response envelope
# -----------------------------------------------------------------------------
# Always {"content": [{"type": "text", "text": <json>}]}.  The text is either
# the Bot API response verbatim or {"error": <message>}.
# -----------------------------------------------------------------------------
def text_envelope(payload: Any) -> dict[str, list[dict[str, str]]]:
    return {"content": [{"type": "text", "text": to_json(payload)}]}


def error_envelope(message: str) -> dict[str, list[dict[str, str]]]:
    return text_envelope({"error": message})


@dataclass(frozen=True)
class ToolOutcome:
    """A response envelope plus whether the call failed."""

    envelope: dict[str, list[dict[str, str]]]
    failed: bool = False

    @property
    def text(self) -> str:
        return self.envelope["content"][0]["text"]

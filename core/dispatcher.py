# =============================================================================
# core/dispatcher.py  -  Tool call -> Bot API call -> response envelope
# =============================================================================
#
# HOW IT WORKS (the flow):
#   1. dispatch() receives a tool name and the raw argument bag
#   2. parse_tool_call() rejects a missing bag and unknown names, then casts
#      the bag into SendMessageArguments or SetMessageReactionArguments
#   3. The matching TelegramClient method is awaited
#   4. The Bot API response is wrapped, JSON-serialized, in one text block
#   5. The envelope comes back as a ToolOutcome; call_tool() returns just the
#      envelope
#
# ERROR CONTRACT:
#   dispatch() and call_tool() never raise.  Anything that goes wrong (bad
#   call, network error, non-JSON reply) comes back as {"error": "<message>"}
#   inside the same envelope shape with ToolOutcome.failed set, and only that
#   one tool call is affected.
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from core.config import Settings
from core.errors import MissingArgumentsError, ToolCallError, UnknownToolError
from core.models import (
    SendMessageArguments,
    SetMessageReactionArguments,
    ToolArguments,
    ToolName,
    ToolOutcome,
    error_envelope,
    text_envelope,
)
from core.telegram_client import TelegramClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppContext:
    """Process-lifetime state: settings plus the one Bot API client."""

    settings: Settings
    client: TelegramClient

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls(
            settings=settings,
            client=TelegramClient(settings.bot_token, api_base=settings.api_base),
        )


def parse_tool_call(name: str, arguments: Optional[Mapping[str, Any]]) -> ToolArguments:
    """Cast a raw tool call into the argument type of the named tool.

    Raises:
        MissingArgumentsError: no argument bag was supplied.
        UnknownToolError: the name is not one of the two Telegram tools.
        ToolCallError: a required argument is absent.
    """
    if arguments is None:
        raise MissingArgumentsError(tool_name=name)

    try:
        tool = ToolName(name)
    except ValueError:
        raise UnknownToolError(name) from None

    if tool is ToolName.SEND_MESSAGE:
        return SendMessageArguments.from_arguments(arguments)
    return SetMessageReactionArguments.from_arguments(arguments)


async def _invoke(client: TelegramClient, args: ToolArguments) -> Any:
    if isinstance(args, SendMessageArguments):
        return await client.send_message(args.chat_id, args.text, args.parse_mode)
    return await client.set_message_reaction(
        args.chat_id, args.message_id, args.reaction, args.is_big
    )


async def dispatch(
    context: AppContext,
    name: str,
    arguments: Optional[Mapping[str, Any]],
) -> ToolOutcome:
    """Run one tool call; the outcome says whether it failed."""
    logger.info("Received tool call: %s", name)
    try:
        args = parse_tool_call(name, arguments)
        response = await _invoke(context.client, args)
    except ToolCallError as exc:
        logger.warning("Rejected tool call %s: %s", name, exc.message)
        return ToolOutcome(error_envelope(exc.message), failed=True)
    except Exception as exc:
        logger.exception("Error executing tool %s", name)
        return ToolOutcome(error_envelope(str(exc)), failed=True)
    return ToolOutcome(text_envelope(response))


async def call_tool(
    context: AppContext,
    name: str,
    arguments: Optional[Mapping[str, Any]],
) -> dict[str, list[dict[str, str]]]:
    """Run one tool call and return its response envelope."""
    outcome = await dispatch(context, name, arguments)
    return outcome.envelope

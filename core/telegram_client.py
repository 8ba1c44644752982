# =============================================================================
# core/telegram_client.py  -  Thin Telegram Bot API client
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Talks to the Telegram Bot API over HTTPS.  One method per remote
#   operation; each builds a form-encoded payload, POSTs it, and returns the
#   parsed JSON body exactly as Telegram sent it.
#
# WHAT IT DOES NOT DO:
#   - It does not inspect the response.  Telegram reports failures inside its
#     own {"ok": false, "description": ...} envelope, and that envelope is
#     handed back to the agent untouched.
#   - No retries, no timeout, no status-code checks.  A network error or a
#     non-JSON body propagates to the caller (the dispatcher).
#   - No connection pooling: every call opens a fresh httpx.AsyncClient.
#
# AUTHENTICATION:
#   The bot token is part of the URL path: https://api.telegram.org/bot<token>/
#   It is never logged.
# =============================================================================

import logging
from typing import Any, Optional

import httpx

from core.config import DEFAULT_API_BASE
from core.models import ReactionTypeEmoji, to_json

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Payload builders (pure functions, tested directly)
# -----------------------------------------------------------------------------
def build_send_message_payload(
    chat_id: str,
    text: str,
    parse_mode: Optional[str] = None,
) -> dict[str, str]:
    """Form fields for sendMessage: chat_id, text, and parse_mode if given."""
    payload = {"chat_id": chat_id, "text": text}
    if parse_mode:
        payload["parse_mode"] = parse_mode
    return payload


def build_set_message_reaction_payload(
    chat_id: str,
    message_id: int,
    reaction: Optional[ReactionTypeEmoji] = None,
    is_big: Optional[bool] = None,
) -> dict[str, str]:
    """Form fields for setMessageReaction.

    message_id is sent as the string form of the value given.  The reaction
    is wrapped as {"reaction": {"type": "emoji", "emoji": ...}} and
    JSON-encoded.  is_big is sent as the literal "True"/"False".
    """
    payload = {"chat_id": chat_id, "message_id": str(message_id)}
    if reaction is not None:
        payload["reaction"] = to_json({"reaction": reaction.to_dict()})
    if is_big is not None:
        # TODO: confirm whether the Bot API accepts "True"; its own examples use lowercase "true".
        payload["is_big"] = "True" if is_big else "False"
    return payload


class TelegramClient:
    """Async client for the two Bot API methods this server exposes."""

    def __init__(
        self,
        bot_token: str,
        api_base: str = DEFAULT_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = f"{api_base.rstrip('/')}/bot{bot_token}"
        # Tests swap in httpx.MockTransport; production uses the default.
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _post(self, method: str, payload: dict[str, str]) -> Any:
        logger.info("Sending %s to Telegram (fields: %s)", method, ", ".join(payload))
        async with httpx.AsyncClient(transport=self._transport, timeout=None) as client:
            response = await client.post(f"{self._base_url}/{method}", data=payload)
        logger.info("Telegram responded to %s with HTTP %s", method, response.status_code)
        return response.json()

    async def send_message(
        self,
        chat_id: str,
        text: str,
        parse_mode: Optional[str] = None,
    ) -> Any:
        payload = build_send_message_payload(chat_id, text, parse_mode)
        return await self._post("sendMessage", payload)

    async def set_message_reaction(
        self,
        chat_id: str,
        message_id: int,
        reaction: Optional[ReactionTypeEmoji] = None,
        is_big: Optional[bool] = None,
    ) -> Any:
        payload = build_set_message_reaction_payload(chat_id, message_id, reaction, is_big)
        return await self._post("setMessageReaction", payload)

"""
Tests for the tool dispatcher.

The dispatcher never raises: every outcome is a one-block text envelope,
either Telegram's reply or {"error": ...}.
"""

import json

import httpx
import pytest

from core.dispatcher import AppContext, call_tool, dispatch, parse_tool_call
from core.errors import MissingArgumentsError, ToolCallError, UnknownToolError
from core.models import ReactionTypeEmoji, SendMessageArguments, SetMessageReactionArguments
from tests.conftest import OK_RESPONSE, make_context


def _text(envelope):
    assert list(envelope) == ["content"]
    assert len(envelope["content"]) == 1
    block = envelope["content"][0]
    assert block["type"] == "text"
    return block["text"]


class TestParseToolCall:
    def test_send_message(self):
        args = parse_tool_call("telegram_send_message", {"chat_id": "@chan", "text": "hi"})
        assert args == SendMessageArguments(chat_id="@chan", text="hi")

    def test_set_reaction(self):
        args = parse_tool_call(
            "telegram_set_message_reaction",
            {"chat_id": "1", "message_id": 2, "reaction": {"type": "emoji", "emoji": "👍"}, "is_big": False},
        )
        assert args == SetMessageReactionArguments(
            chat_id="1", message_id=2, reaction=ReactionTypeEmoji(emoji="👍"), is_big=False
        )

    def test_missing_arguments(self):
        with pytest.raises(MissingArgumentsError):
            parse_tool_call("telegram_send_message", None)

    def test_unknown_tool(self):
        with pytest.raises(UnknownToolError, match="Unknown Telegram tool: nope"):
            parse_tool_call("nope", {"chat_id": "1"})

    def test_name_match_is_exact(self):
        with pytest.raises(UnknownToolError):
            parse_tool_call("Telegram_Send_Message", {"chat_id": "1", "text": "x"})

    def test_missing_required_argument(self):
        with pytest.raises(ToolCallError, match="text"):
            parse_tool_call("telegram_send_message", {"chat_id": "1"})


@pytest.mark.asyncio
async def test_unknown_tool_envelope(context):
    envelope = await call_tool(context, "telegram_delete_message", {"chat_id": "1"})
    assert envelope == {
        "content": [
            {"type": "text", "text": '{"error":"Unknown Telegram tool: telegram_delete_message"}'}
        ]
    }


@pytest.mark.asyncio
async def test_no_arguments_envelope(context, fake_telegram):
    envelope = await call_tool(context, "telegram_send_message", None)
    assert "No arguments provided" in _text(envelope)
    assert fake_telegram.requests == []


@pytest.mark.asyncio
async def test_empty_bag_goes_on_to_name_match(context, fake_telegram):
    envelope = await call_tool(context, "nope", {})
    assert json.loads(_text(envelope)) == {"error": "Unknown Telegram tool: nope"}


@pytest.mark.asyncio
async def test_empty_bag_for_known_tool_reports_first_missing_key(context, fake_telegram):
    envelope = await call_tool(context, "telegram_send_message", {})
    assert json.loads(_text(envelope)) == {"error": "Missing required argument: chat_id"}
    assert fake_telegram.requests == []


@pytest.mark.asyncio
async def test_send_message_scenario(context, fake_telegram):
    envelope = await call_tool(context, "telegram_send_message", {"chat_id": "@chan", "text": "hi"})

    assert fake_telegram.last_form() == [("chat_id", "@chan"), ("text", "hi")]
    assert json.loads(_text(envelope)) == OK_RESPONSE


@pytest.mark.asyncio
async def test_send_message_with_parse_mode(context, fake_telegram):
    await call_tool(
        context,
        "telegram_send_message",
        {"chat_id": "42", "text": "*bold*", "parse_mode": "MarkdownV2"},
    )
    assert dict(fake_telegram.last_form())["parse_mode"] == "MarkdownV2"


@pytest.mark.asyncio
async def test_set_reaction_scenario(context, fake_telegram):
    await call_tool(
        context,
        "telegram_set_message_reaction",
        {"chat_id": "123", "message_id": 45, "is_big": True},
    )
    assert fake_telegram.last_form() == [("chat_id", "123"), ("message_id", "45"), ("is_big", "True")]


@pytest.mark.asyncio
async def test_set_reaction_with_emoji(context, fake_telegram):
    await call_tool(
        context,
        "telegram_set_message_reaction",
        {"chat_id": "123", "message_id": 45, "reaction": {"type": "emoji", "emoji": "🔥"}},
    )
    form = dict(fake_telegram.last_form())
    assert json.loads(form["reaction"]) == {"reaction": {"type": "emoji", "emoji": "🔥"}}
    assert "is_big" not in form


@pytest.mark.asyncio
async def test_telegram_failure_is_wrapped_verbatim():
    failure = {"ok": False, "error_code": 400, "description": "Bad Request: message to react not found"}
    context, _ = make_context(lambda request: httpx.Response(400, json=failure))

    envelope = await call_tool(context, "telegram_set_message_reaction", {"chat_id": "1", "message_id": 9})
    assert json.loads(_text(envelope)) == failure


@pytest.mark.asyncio
async def test_network_error_becomes_error_envelope():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    context, _ = make_context(refuse)

    envelope = await call_tool(context, "telegram_send_message", {"chat_id": "1", "text": "hi"})
    assert json.loads(_text(envelope)) == {"error": "connection refused"}


@pytest.mark.asyncio
async def test_non_json_reply_becomes_error_envelope():
    context, _ = make_context(lambda request: httpx.Response(502, text="Bad Gateway"))

    envelope = await call_tool(context, "telegram_send_message", {"chat_id": "1", "text": "hi"})
    assert "error" in json.loads(_text(envelope))


@pytest.mark.asyncio
async def test_missing_required_argument_envelope(context, fake_telegram):
    envelope = await call_tool(context, "telegram_set_message_reaction", {"chat_id": "1"})
    assert json.loads(_text(envelope)) == {"error": "Missing required argument: message_id"}
    assert fake_telegram.requests == []


def test_context_from_settings():
    from core.config import Settings

    context = AppContext.from_settings(Settings(bot_token="t", api_base="http://local"))
    assert context.client.base_url == "http://local/bott"


@pytest.mark.asyncio
@pytest.mark.parametrize("message_id, sent", [(45.5, "45.5"), (45.0, "45"), ("45", "45")])
async def test_message_id_sent_as_given(context, fake_telegram, message_id, sent):
    await call_tool(
        context,
        "telegram_set_message_reaction",
        {"chat_id": "123", "message_id": message_id},
    )
    assert dict(fake_telegram.last_form())["message_id"] == sent


class TestDispatchOutcome:
    @pytest.mark.asyncio
    async def test_success_is_not_failed(self, context):
        outcome = await dispatch(context, "telegram_send_message", {"chat_id": "1", "text": "hi"})
        assert outcome.failed is False
        assert json.loads(outcome.text) == OK_RESPONSE

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "name, arguments",
        [
            ("telegram_send_message", None),
            ("telegram_delete_message", {"chat_id": "1"}),
            ("telegram_set_message_reaction", {"chat_id": "1"}),
        ],
    )
    async def test_rejected_calls_are_failed(self, context, name, arguments):
        outcome = await dispatch(context, name, arguments)
        assert outcome.failed is True
        assert "error" in json.loads(outcome.text)

    @pytest.mark.asyncio
    async def test_transport_error_is_failed(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        context, _ = make_context(refuse)
        outcome = await dispatch(context, "telegram_send_message", {"chat_id": "1", "text": "hi"})
        assert outcome.failed is True
        assert outcome.envelope == await call_tool(context, "telegram_send_message", {"chat_id": "1", "text": "hi"})

    @pytest.mark.asyncio
    async def test_telegram_error_reply_is_passed_through_not_failed(self):
        failure = {"ok": False, "error_code": 400, "description": "Bad Request: chat not found"}
        context, _ = make_context(lambda request: httpx.Response(400, json=failure))

        outcome = await dispatch(context, "telegram_send_message", {"chat_id": "1", "text": "hi"})
        assert outcome.failed is False
        assert json.loads(outcome.text) == failure

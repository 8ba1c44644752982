"""Shared fixtures: a Bot API stand-in built on httpx.MockTransport."""

from typing import Any, Callable, Optional
from urllib.parse import parse_qsl

import httpx
import pytest

from core.config import Settings
from core.dispatcher import AppContext
from core.telegram_client import TelegramClient

BOT_TOKEN = "123456-TESTTOKEN"

OK_RESPONSE = {"ok": True, "result": {"message_id": 7, "chat": {"id": -100, "type": "channel"}}}


class FakeTelegram:
    """Records every request and answers with a canned reply."""

    def __init__(self, reply: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.requests: list[httpx.Request] = []
        self._reply = reply or (lambda request: httpx.Response(200, json=OK_RESPONSE))
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._reply(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_form(self) -> list[tuple[str, str]]:
        """Form fields of the last request, in the order they were sent."""
        return parse_qsl(self.last_request.content.decode(), keep_blank_values=True)


@pytest.fixture
def fake_telegram() -> FakeTelegram:
    return FakeTelegram()


@pytest.fixture
def client(fake_telegram: FakeTelegram) -> TelegramClient:
    return TelegramClient(BOT_TOKEN, transport=fake_telegram.transport)


@pytest.fixture
def context(client: TelegramClient) -> AppContext:
    return AppContext(settings=Settings(bot_token=BOT_TOKEN), client=client)


def make_context(reply: Callable[[httpx.Request], Any]) -> tuple[AppContext, FakeTelegram]:
    fake = FakeTelegram(reply)
    client = TelegramClient(BOT_TOKEN, transport=fake.transport)
    return AppContext(settings=Settings(bot_token=BOT_TOKEN), client=client), fake

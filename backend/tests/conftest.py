import json
import random

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketState

from main import create_app
from pong_arena.config import Config
from pong_arena.services import GameManager, LobbyManager, SessionManager


class TestConfig(Config):
    CORS_ORIGINS = ["http://testserver"]
    TICK_RATE = 60


class FakeChannel:
    """Stands in for a Starlette WebSocket in service-level tests."""

    def __init__(self):
        self.client_state = WebSocketState.CONNECTING
        self.application_state = WebSocketState.CONNECTING
        self.sent = []
        self.close_code = None
        self.close_reason = None

    async def accept(self):
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED

    async def send_json(self, payload):
        self.sent.append(payload)

    async def send_text(self, text):
        self.sent.append(json.loads(text))

    async def close(self, code=1000, reason=None):
        self.close_code = code
        self.close_reason = reason
        self.application_state = WebSocketState.DISCONNECTED

    def types(self):
        return [item["type"] for item in self.sent]

    def last(self, message_type):
        for item in reversed(self.sent):
            if item["type"] == message_type:
                return item
        return None

    def clear(self):
        self.sent.clear()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def lobbies():
    manager = LobbyManager()
    yield manager
    await manager.shutdown()


@pytest.fixture
def games(lobbies):
    # The background loop never fires during a test; ticks are driven by hand.
    return GameManager(lobbies, tick_rate=1 / 3600, rng=random.Random(7))


@pytest.fixture
def sessions(lobbies, games):
    return SessionManager(lobbies, games)


@pytest.fixture
def channel_factory():
    return FakeChannel


@pytest.fixture
def client():
    with TestClient(create_app(TestConfig)) as test_client:
        yield test_client

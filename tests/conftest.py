import json

import pytest

from guessgame.config import Settings
from guessgame.game import GameManager, GameSession


class FakeConnection:
    """Stands in for a WebSocket; records every frame sent to it."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: list[dict] = []

    async def send_text(self, data: str) -> None:
        if self.fail:
            raise RuntimeError("connection closed")
        self.sent.append(json.loads(data))

    def types(self) -> list[str]:
        return [message["type"] for message in self.sent]

    def last(self, message_type: str) -> dict:
        for message in reversed(self.sent):
            if message["type"] == message_type:
                return message
        raise AssertionError(f"no {message_type} message received")

    def clear(self) -> None:
        self.sent.clear()


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def make_connection():
    return FakeConnection


@pytest.fixture
def session() -> GameSession:
    """A started two-player session with round 1 open."""
    game = GameSession("ABC123")
    game.add_player("alice", FakeConnection())
    game.add_player("bob", FakeConnection())
    game.begin()
    return game


@pytest.fixture
def settings() -> Settings:
    return Settings(
        round_timeout_sec=0,
        result_delay_sec=0.01,
        timeout_restart_delay_sec=0,
    )


@pytest.fixture
def manager(settings: Settings) -> GameManager:
    return GameManager(settings)

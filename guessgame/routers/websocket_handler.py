import logging

from fastapi import WebSocket

from ..errors import GameError, InvalidState, MalformedMessage, SessionNotFound
from ..game import GameManager, GameRoom
from ..game.registry import normalize_code
from ..models import (
    ClientMessage,
    CreateMessage,
    JoinMessage,
    NumberMessage,
    TimeoutMessage,
    parse_client_message,
)

log = logging.getLogger(__name__)


class WebSocketHandler:
    """Routes one player's messages to the game that connection sits in."""

    def __init__(self, websocket: WebSocket, manager: GameManager):
        self.websocket = websocket
        self.manager = manager
        self.room: GameRoom | None = None
        self.slot: int | None = None
        self.username: str | None = None

    @property
    def in_live_game(self) -> bool:
        return self.room is not None and self.manager.registry.is_live(self.room)

    async def handle(self, raw: str | bytes) -> None:
        """Parse and process one inbound frame, dropping anything invalid."""
        try:
            message = parse_client_message(raw)
            await self._process_message(message)
        except GameError as e:
            log.warning(f"Dropping message from {self.username or 'anonymous'}: {e}")

    async def close(self) -> None:
        if self.room is not None:
            await self.manager.disconnect(self.room, self.websocket)
        self.room = None
        self.slot = None

    async def _process_message(self, message: ClientMessage) -> None:
        if isinstance(message, CreateMessage):
            await self._handle_create(message)
        elif isinstance(message, JoinMessage):
            await self._handle_join(message)
        elif isinstance(message, NumberMessage):
            await self._handle_number(message)
        elif isinstance(message, TimeoutMessage):
            await self._handle_timeout(message)
        else:
            raise MalformedMessage(f"Unhandled message type {type(message).__name__}")

    async def _handle_create(self, message: CreateMessage) -> None:
        if self.in_live_game:
            raise InvalidState(f"Already playing in game {self.room.code}")
        self.username = message.username
        self.room = await self.manager.create_game(self.websocket, message.username)
        self.slot = 0

    async def _handle_join(self, message: JoinMessage) -> None:
        if self.in_live_game:
            raise InvalidState(f"Already playing in game {self.room.code}")
        self.username = message.username
        room, slot = await self.manager.join_game(
            message.game_code, self.websocket, message.username
        )
        self.room = room
        self.slot = slot

    async def _handle_number(self, message: NumberMessage) -> None:
        room = self._require_room(message.game_code)
        if message.player_number is not None and message.player_number != self.slot + 1:
            raise InvalidState(
                f"Player number {message.player_number} does not match seat {self.slot + 1}"
            )
        await self.manager.submit_number(room, self.slot, message.number)

    async def _handle_timeout(self, message: TimeoutMessage) -> None:
        room = self._require_room(message.game_code)
        await self.manager.client_timeout(room)

    def _require_room(self, game_code: str | None) -> GameRoom:
        if not self.in_live_game:
            raise SessionNotFound(game_code or "")
        if game_code is not None and normalize_code(game_code) != self.room.code:
            raise InvalidState(f"Connection is not part of game {game_code}")
        return self.room

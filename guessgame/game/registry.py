import asyncio
import logging
import secrets
import string
from dataclasses import dataclass, field

from ..errors import SessionNotFound
from .session import Connection, GameSession
from .timer import RoundTimer

log = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_game_code(length: int = 6) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def normalize_code(code: str) -> str:
    return code.strip().upper()


@dataclass
class GameRoom:
    """A live session plus everything that serialises and schedules it."""

    session: GameSession
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    round_timer: RoundTimer = field(init=False)
    next_round_timer: RoundTimer = field(init=False)

    def __post_init__(self):
        self.round_timer = RoundTimer(f"round-deadline-{self.session.code}")
        self.next_round_timer = RoundTimer(f"next-round-{self.session.code}")

    @property
    def code(self) -> str:
        return self.session.code

    def cancel_timers(self) -> None:
        self.round_timer.cancel()
        self.next_round_timer.cancel()


class SessionRegistry:
    def __init__(
        self,
        code_length: int = 6,
        target_factor: float = 0.8,
        losing_score: int = -10,
    ):
        self.code_length = code_length
        self.target_factor = target_factor
        self.losing_score = losing_score
        self._rooms: dict[str, GameRoom] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, code: str) -> bool:
        return normalize_code(code) in self._rooms

    async def create(self, connection: Connection, username: str) -> GameRoom:
        async with self._lock:
            code = generate_game_code(self.code_length)
            while code in self._rooms:
                code = generate_game_code(self.code_length)

            session = GameSession(
                code,
                target_factor=self.target_factor,
                losing_score=self.losing_score,
            )
            session.add_player(username, connection)
            room = GameRoom(session=session)
            self._rooms[code] = room
            return room

    async def join(self, code: str, connection: Connection, username: str) -> tuple[GameRoom, int]:
        async with self._lock:
            room = self.lookup(code)
            slot = room.session.add_player(username, connection)
            return room, slot

    async def remove(self, code: str) -> GameRoom | None:
        async with self._lock:
            room = self._rooms.pop(normalize_code(code), None)
        if room is not None:
            log.info(f"Removed game {room.code}")
        return room

    def lookup(self, code: str) -> GameRoom:
        room = self._rooms.get(normalize_code(code))
        if room is None:
            raise SessionNotFound(code)
        return room

    def is_live(self, room: GameRoom) -> bool:
        return self._rooms.get(room.code) is room

    def rooms(self) -> list[GameRoom]:
        return list(self._rooms.values())

from .session import Connection, GameSession
from .registry import GameRoom, SessionRegistry, generate_game_code
from .timer import RoundTimer
from .manager import GameManager

__all__ = [
    "Connection",
    "GameSession",
    "GameRoom",
    "SessionRegistry",
    "generate_game_code",
    "RoundTimer",
    "GameManager",
]

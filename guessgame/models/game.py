from enum import Enum

from pydantic import BaseModel


class GamePhase(str, Enum):
    AWAITING_OPPONENT = "awaiting_opponent"
    ROUND_OPEN = "round_open"
    ROUND_RESOLVED = "round_resolved"
    GAME_OVER = "game_over"


class PlayerSlot(BaseModel):
    username: str
    score: int = 0
    number: float | None = None


class RoundState(BaseModel):
    round_number: int = 0
    timeout_fired: bool = False

    def reset(self):
        self.timeout_fired = False
        self.round_number += 1


class PlayerSummary(BaseModel):
    username: str
    score: int


class GameSummary(BaseModel):
    code: str
    phase: GamePhase
    round: int
    players: list[PlayerSummary]

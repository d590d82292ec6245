from .game import GamePhase, GameSummary, PlayerSlot, PlayerSummary, RoundState
from .events import (
    Event,
    GameCodeEvent,
    GameOverEvent,
    OpponentLeftEvent,
    Outbound,
    ResultEvent,
    RoundStartEvent,
    StartEvent,
    TimeoutEvent,
)
from .messages import (
    ClientMessage,
    CreateMessage,
    JoinMessage,
    NumberMessage,
    TimeoutMessage,
    parse_client_message,
)

__all__ = [
    "GamePhase",
    "GameSummary",
    "PlayerSlot",
    "PlayerSummary",
    "RoundState",
    "Event",
    "GameCodeEvent",
    "GameOverEvent",
    "OpponentLeftEvent",
    "Outbound",
    "ResultEvent",
    "RoundStartEvent",
    "StartEvent",
    "TimeoutEvent",
    "ClientMessage",
    "CreateMessage",
    "JoinMessage",
    "NumberMessage",
    "TimeoutMessage",
    "parse_client_message",
]

"""Outbound events sent to player connections."""
from dataclasses import dataclass
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ServerEvent(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


class GameCodeEvent(ServerEvent):
    type: Literal["gameCode"] = "gameCode"
    game_code: str


class StartEvent(ServerEvent):
    type: Literal["start"] = "start"
    player_number: int
    opponent: str


class RoundStartEvent(ServerEvent):
    type: Literal["roundStart"] = "roundStart"
    round: int


class ResultEvent(ServerEvent):
    type: Literal["result"] = "result"
    numbers: list[float]
    average: float
    target: float
    winner: int
    scores: list[int]


class TimeoutEvent(ServerEvent):
    type: Literal["timeout"] = "timeout"
    scores: list[int]


class GameOverEvent(ServerEvent):
    type: Literal["gameOver"] = "gameOver"
    winner: str


class OpponentLeftEvent(ServerEvent):
    type: Literal["opponentLeft"] = "opponentLeft"


Event = Union[
    GameCodeEvent,
    StartEvent,
    RoundStartEvent,
    ResultEvent,
    TimeoutEvent,
    GameOverEvent,
    OpponentLeftEvent,
]


@dataclass(frozen=True)
class Outbound:
    """An event addressed to one player slot (0-based)."""

    slot: int
    event: Event

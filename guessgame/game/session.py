import logging
import math
from typing import Protocol

from ..errors import InvalidState, SessionFull
from ..models import (
    GameCodeEvent,
    GameOverEvent,
    GamePhase,
    GameSummary,
    Outbound,
    PlayerSlot,
    PlayerSummary,
    ResultEvent,
    RoundStartEvent,
    RoundState,
    StartEvent,
    TimeoutEvent,
)
from .scoring import compute_target, find_loser, pick_winner

log = logging.getLogger(__name__)

MAX_PLAYERS = 2


class Connection(Protocol):
    async def send_text(self, data: str) -> None: ...


class GameSession:
    """State machine for one two-player match.

    The session never performs I/O. Every operation returns the events it
    produced as ``Outbound`` envelopes addressed to slot indexes; delivering
    them and scheduling timers is the caller's job.
    """

    def __init__(
        self,
        code: str,
        target_factor: float = 0.8,
        losing_score: int = -10,
    ):
        log.info(f"Creating new game session {code}")
        self.code = code
        self.target_factor = target_factor
        self.losing_score = losing_score

        self._connections: list[Connection] = []
        self._players: list[PlayerSlot] = []

        self.phase = GamePhase.AWAITING_OPPONENT
        self.current_round = RoundState()
        self.winner: str | None = None

    def __len__(self) -> int:
        return len(self._players)

    @property
    def is_full(self) -> bool:
        return len(self._players) >= MAX_PLAYERS

    @property
    def is_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def players(self) -> list[PlayerSlot]:
        return list(self._players)

    @property
    def round_number(self) -> int:
        return self.current_round.round_number

    @property
    def timeout_fired(self) -> bool:
        return self.current_round.timeout_fired

    @property
    def scores(self) -> list[int]:
        return [player.score for player in self._players]

    def connection_for(self, slot: int) -> Connection:
        return self._connections[slot]

    def slot_of(self, connection: Connection) -> int | None:
        for index, conn in enumerate(self._connections):
            if conn is connection:
                return index
        return None

    def add_player(self, username: str, connection: Connection) -> int:
        if self.is_full:
            raise SessionFull(self.code)
        if self.phase != GamePhase.AWAITING_OPPONENT:
            raise InvalidState(f"Game {self.code} is not accepting players")

        log.info(f"Adding player {username} to game {self.code}")
        self._connections.append(connection)
        self._players.append(PlayerSlot(username=username))
        return len(self._players) - 1

    def announce_code(self) -> list[Outbound]:
        return [Outbound(slot=0, event=GameCodeEvent(game_code=self.code))]

    def begin(self) -> list[Outbound]:
        """Tell both players who they face and open the first round."""
        if not self.is_full or self.phase != GamePhase.AWAITING_OPPONENT:
            raise InvalidState(f"Game {self.code} cannot start")

        outbound = []
        for index, player in enumerate(self._players):
            opponent = self._players[1 - index]
            outbound.append(
                Outbound(
                    slot=index,
                    event=StartEvent(player_number=index + 1, opponent=opponent.username),
                )
            )
        return outbound + self.start_next_round()

    def submit_number(self, slot: int, value: float) -> list[Outbound]:
        if self.phase != GamePhase.ROUND_OPEN:
            log.debug(f"Game {self.code}: submission from slot {slot} outside an open round")
            return []
        if slot < 0 or slot >= len(self._players):
            log.debug(f"Game {self.code}: submission from unknown slot {slot}")
            return []
        if not math.isfinite(value):
            log.debug(f"Game {self.code}: non-finite submission from slot {slot}")
            return []

        player = self._players[slot]
        if player.number is not None:
            log.debug(f"Game {self.code}: duplicate submission from {player.username}")
            return []

        # Late numbers are kept after a timeout but never scored
        player.number = value
        if self.current_round.timeout_fired:
            return []
        if all(p.number is not None for p in self._players):
            return self._resolve_by_completion()
        return []

    def force_timeout(self) -> list[Outbound]:
        if self.phase != GamePhase.ROUND_OPEN or self.current_round.timeout_fired:
            return []

        log.info(f"Game {self.code}: round {self.round_number} timed out")
        self.current_round.timeout_fired = True
        for player in self._players:
            if player.number is None:
                player.score -= 1

        outbound = self._to_all(TimeoutEvent(scores=self.scores))
        return outbound + self._check_game_over()

    def start_next_round(self) -> list[Outbound]:
        if self.is_over:
            return []

        for player in self._players:
            player.number = None
        self.current_round.reset()
        self.phase = GamePhase.ROUND_OPEN
        return self._to_all(RoundStartEvent(round=self.round_number))

    def summary(self) -> GameSummary:
        return GameSummary(
            code=self.code,
            phase=self.phase,
            round=self.round_number,
            players=[
                PlayerSummary(username=p.username, score=p.score) for p in self._players
            ],
        )

    def _resolve_by_completion(self) -> list[Outbound]:
        numbers = [p.number for p in self._players]
        average, target = compute_target(numbers, self.target_factor)
        winner = pick_winner(numbers, target)

        for index, player in enumerate(self._players):
            if index != winner:
                player.score -= 1

        self.phase = GamePhase.ROUND_RESOLVED
        outbound = self._to_all(
            ResultEvent(
                numbers=numbers,
                average=average,
                target=target,
                winner=winner + 1,
                scores=self.scores,
            )
        )
        return outbound + self._check_game_over()

    def _check_game_over(self) -> list[Outbound]:
        loser = find_loser(self.scores, self.losing_score)
        if loser is None:
            return []

        self.phase = GamePhase.GAME_OVER
        self.winner = self._players[1 - loser].username
        log.info(f"Game {self.code} over, winner {self.winner}")
        return self._to_all(GameOverEvent(winner=self.winner))

    def _to_all(self, event) -> list[Outbound]:
        return [Outbound(slot=index, event=event) for index in range(len(self._players))]

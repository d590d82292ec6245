import logging

from ..config import Settings
from ..errors import SessionNotFound
from ..models import GamePhase, OpponentLeftEvent, Outbound
from .registry import GameRoom, SessionRegistry
from .session import Connection

log = logging.getLogger(__name__)


class GameManager:
    """Runs live games: serialises every mutation of a game under its lock,
    delivers the events a session produces and schedules its timers."""

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()
        self.registry = SessionRegistry(
            code_length=self.settings.game_code_length,
            target_factor=self.settings.target_factor,
            losing_score=self.settings.losing_score,
        )

    async def create_game(self, connection: Connection, username: str) -> GameRoom:
        room = await self.registry.create(connection, username)
        log.info(f"Player {username} created game {room.code}")
        async with room.lock:
            await self.deliver(room, room.session.announce_code())
        return room

    async def join_game(
        self, code: str, connection: Connection, username: str
    ) -> tuple[GameRoom, int]:
        room, slot = await self.registry.join(code, connection, username)
        log.info(f"Player {username} joined game {room.code}")

        async with room.lock:
            if not self.registry.is_live(room):
                raise SessionNotFound(code)
            outbound = room.session.begin()
            await self.deliver(room, outbound)
            self._arm_round_deadline(room)
        return room, slot

    async def submit_number(self, room: GameRoom, slot: int, value: float) -> None:
        async with room.lock:
            if not self.registry.is_live(room):
                return
            outbound = room.session.submit_number(slot, value)
            await self._advance(room, outbound)

    async def client_timeout(self, room: GameRoom) -> None:
        if not self.settings.allow_client_timeout:
            log.debug(f"Ignoring client timeout hint for game {room.code}")
            return
        async with room.lock:
            if not self.registry.is_live(room):
                return
            await self._advance(room, room.session.force_timeout())

    async def disconnect(self, room: GameRoom, connection: Connection) -> None:
        async with room.lock:
            if not self.registry.is_live(room):
                return
            slot = room.session.slot_of(connection)
            if slot is None:
                return

            log.info(f"Player in slot {slot + 1} left game {room.code}, tearing down")
            await self._close(room)
            others = [
                Outbound(slot=index, event=OpponentLeftEvent())
                for index in range(len(room.session))
                if index != slot
            ]
            await self.deliver(room, others)

    async def shutdown(self) -> None:
        for room in self.registry.rooms():
            room.cancel_timers()
            await self.registry.remove(room.code)

    async def deliver(self, room: GameRoom, outbound: list[Outbound]) -> None:
        for envelope in outbound:
            connection = room.session.connection_for(envelope.slot)
            try:
                await connection.send_text(envelope.event.to_json())
            except Exception as e:
                log.warning(
                    f"Failed to send {envelope.event.type} to slot {envelope.slot + 1} "
                    f"of game {room.code}: {e}"
                )

    async def _advance(self, room: GameRoom, outbound: list[Outbound]) -> None:
        if not outbound:
            return

        session = room.session
        await self.deliver(room, outbound)

        if session.is_over:
            await self._close(room)
        elif session.phase == GamePhase.ROUND_RESOLVED:
            room.round_timer.cancel()
            self._schedule_next_round(room, self.settings.result_delay_sec)
        elif session.timeout_fired:
            room.round_timer.cancel()
            delay = self.settings.timeout_restart_delay_sec
            if delay > 0:
                self._schedule_next_round(room, delay)
            else:
                await self._open_next_round(room)

    async def _close(self, room: GameRoom) -> None:
        room.cancel_timers()
        await self.registry.remove(room.code)

    async def _open_next_round(self, room: GameRoom) -> None:
        await self.deliver(room, room.session.start_next_round())
        self._arm_round_deadline(room)

    def _schedule_next_round(self, room: GameRoom, delay: float) -> None:
        expected_round = room.session.round_number

        async def start_when_due() -> None:
            async with room.lock:
                if not self.registry.is_live(room):
                    return
                if room.session.round_number != expected_round:
                    return
                await self._open_next_round(room)

        room.next_round_timer.arm(delay, start_when_due)

    def _arm_round_deadline(self, room: GameRoom) -> None:
        timeout = self.settings.round_timeout_sec
        if timeout <= 0 or room.session.phase != GamePhase.ROUND_OPEN:
            return
        expected_round = room.session.round_number

        async def expire() -> None:
            async with room.lock:
                if not self.registry.is_live(room):
                    return
                if room.session.round_number != expected_round:
                    return
                await self._advance(room, room.session.force_timeout())

        room.round_timer.arm(timeout, expire)

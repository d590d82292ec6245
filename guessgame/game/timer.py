import asyncio
import logging
from collections.abc import Awaitable, Callable

log = logging.getLogger(__name__)


class RoundTimer:
    """Single-shot, cancellable deadline backed by an asyncio task.

    Arming again replaces any pending deadline. Once the deadline passes the
    timer disarms itself before running the callback, so the callback may
    safely cancel the timer that fired it.
    """

    def __init__(self, name: str):
        self.name = name
        self._task: asyncio.Task | None = None

    @property
    def armed(self) -> bool:
        return self._task is not None and not self._task.done()

    def arm(self, delay: float, callback: Callable[[], Awaitable[None]]) -> None:
        self.cancel()
        self._task = asyncio.create_task(self._run(delay, callback), name=self.name)

    def cancel(self) -> None:
        task, self._task = self._task, None
        if task is None or task.done() or task is asyncio.current_task():
            return
        task.cancel()

    async def _run(self, delay: float, callback: Callable[[], Awaitable[None]]) -> None:
        await asyncio.sleep(delay)
        self._task = None
        log.debug(f"Timer {self.name} fired")
        try:
            await callback()
        except Exception:
            log.exception(f"Timer {self.name} callback failed")

"""
Tick Scheduler - The periodic clock for real-time sessions.

One scheduler per active game. It is the only producer of round
advances in real-time play. It stops on its own once the engine
reaches GAME_OVER, and the session cancels it when play is abandoned.
A restart gets a fresh scheduler.

The sleep function is injectable, so tests can run a whole game
without waiting on real time.
"""

from __future__ import annotations
import asyncio
import logging
from typing import Awaitable, Callable, TYPE_CHECKING

from ..config import TICK_SECONDS

if TYPE_CHECKING:
    from ..engine_core import RoundEngine

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]


class TickScheduler:
    """
    Drives engine.tick() once per period on the running event loop.

    Usage:
        scheduler = TickScheduler(engine)
        scheduler.start()      # inside a running loop
        ...
        scheduler.cancel()
    """

    def __init__(
        self,
        engine: RoundEngine,
        period: float = TICK_SECONDS,
        sleep: SleepFn = asyncio.sleep,
    ):
        self.engine = engine
        self.period = period
        self._sleep = sleep
        self._task: asyncio.Task | None = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        """Schedule the tick loop. Must be called with a running loop."""
        if self.running:
            return self._task
        self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    async def run(self):
        """Tick until the game is over."""
        logger.debug("Tick scheduler started for game %s", self.engine.state.game_id)
        while self.engine.is_active:
            await self._sleep(self.period)
            self.engine.tick()
            self.ticks += 1
        logger.debug(
            "Tick scheduler finished for game %s after %d ticks",
            self.engine.state.game_id, self.ticks,
        )

    def cancel(self):
        """Detach the clock. Safe to call more than once."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

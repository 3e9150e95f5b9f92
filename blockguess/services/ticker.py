"""
AutoCloseTicker - Background task that closes due rounds on a fixed interval
"""

import asyncio
import logging
from typing import Callable, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from blockguess.core.clock import Clock, system_clock
from blockguess.services.round_service import RoundService

logger = logging.getLogger(__name__)


class AutoCloseTicker:
    """
    Runs RoundService.auto_close_due every `interval` seconds.

    Missed ticks don't matter: the sweep is driven by end_time, not by how
    many times it ran.
    """

    def __init__(
        self,
        db_provider: Callable[[], AsyncIOMotorDatabase],
        interval: float = 5.0,
        clock: Clock = system_clock
    ):
        self.db_provider = db_provider
        self.interval = interval
        self.clock = clock
        self.running = False
        self.task: Optional[asyncio.Task] = None

    def start(self):
        """Start the ticker loop in the background"""
        if self.task and not self.task.done():
            return
        self.running = True
        self.task = asyncio.create_task(self._loop())
        logger.info(f"Starting auto-close ticker (every {self.interval}s)")

    async def stop(self):
        """Stop the ticker and wait for the loop to exit"""
        self.running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
            self.task = None
        logger.info("Auto-close ticker stopped")

    async def tick(self) -> int:
        """Run one sweep. Returns the number of rounds closed."""
        service = RoundService(self.db_provider(), self.clock)
        return await service.auto_close_due()

    async def _loop(self):
        while self.running:
            try:
                await self.tick()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Error in auto-close ticker")
            await asyncio.sleep(self.interval)

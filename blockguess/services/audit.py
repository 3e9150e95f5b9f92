"""
AuditTrail - best-effort writer for the event log.

A failed audit write is logged and dropped; it never fails or rolls back the
operation that produced it.
"""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from blockguess.core.clock import Clock, system_clock
from blockguess.core.exceptions import StorageFailureError
from blockguess.models.event_log import LogEvent
from blockguess.repositories.counter_repository import CounterRepository
from blockguess.repositories.event_log_repository import EventLogRepository

logger = logging.getLogger(__name__)


class AuditTrail:
    def __init__(self, db: AsyncIOMotorDatabase, clock: Clock = system_clock):
        self.counter_repo = CounterRepository(db)
        self.log_repo = EventLogRepository(db)
        self.clock = clock

    async def record(self, event_type: str, details: str) -> None:
        try:
            log_id = await self.counter_repo.next_id("logs")
            await self.log_repo.append(LogEvent(
                log_id=log_id,
                event_type=event_type,
                details=details,
                timestamp=self.clock(),
            ))
        except (PyMongoError, StorageFailureError) as e:
            logger.warning(f"⚠️ Audit entry {event_type} not written: {e}")

    async def get_recent(self, limit: int = 100, event_type: str | None = None) -> list[LogEvent]:
        return await self.log_repo.get_recent(limit, event_type)

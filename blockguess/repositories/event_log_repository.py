"""
📝 EventLogRepository - Log de auditoría append-only
"""

from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase

from blockguess.models.event_log import LogEvent


class EventLogRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["logs"]

    async def append(self, entry: LogEvent) -> LogEvent:
        await self.collection.insert_one(entry.model_dump())
        return entry

    async def get_recent(
        self,
        limit: int = 100,
        event_type: Optional[str] = None
    ) -> list[LogEvent]:
        query = {"event_type": event_type} if event_type else {}
        cursor = self.collection.find(query).sort(
            [("timestamp", -1), ("log_id", -1)]
        ).limit(limit)

        docs = await cursor.to_list(length=limit)
        return [LogEvent(**doc) for doc in docs]

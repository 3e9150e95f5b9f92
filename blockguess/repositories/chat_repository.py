"""
💬 ChatRepository - Mensajes del chat
"""

from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from blockguess.core.exceptions import StorageFailureError
from blockguess.models.chat import ChatMessage


class ChatRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["chat_messages"]

    async def create(self, message: ChatMessage) -> ChatMessage:
        try:
            await self.collection.insert_one(message.model_dump())
            return message
        except PyMongoError as e:
            raise StorageFailureError(f"Could not save chat message: {e}")

    async def get_recent(
        self,
        round_id: Optional[str] = None,
        limit: int = 100
    ) -> list[ChatMessage]:
        """Últimos mensajes, los más nuevos primero"""
        query = {"round_id": round_id} if round_id else {}
        cursor = self.collection.find(query).sort(
            [("timestamp", -1), ("chat_id", -1)]
        ).limit(limit)

        docs = await cursor.to_list(length=limit)
        return [ChatMessage(**doc) for doc in docs]

"""
🔢 CounterRepository - IDs numéricos monótonos por colección

MongoDB no tiene auto-increment: se guarda un contador por colección en
`counters` y se incrementa de forma atómica.
"""

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from blockguess.core.exceptions import StorageFailureError


class CounterRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["counters"]

    async def next_id(self, name: str) -> int:
        """Reserva y retorna el siguiente ID para `name` (empieza en 1)"""
        try:
            doc = await self.collection.find_one_and_update(
                {"_id": name},
                {"$inc": {"seq": 1}},
                upsert=True,
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            raise StorageFailureError(f"Could not allocate id for {name}: {e}")

        return int(doc["seq"])

"""
✅ CheckInRepository - Registro diario de check-ins (solo inserción)
"""

from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from blockguess.core.exceptions import AlreadyCheckedInError, StorageFailureError
from blockguess.models.checkin import CheckIn


class CheckInRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["checkins"]

    async def create(self, checkin: CheckIn) -> CheckIn:
        try:
            await self.collection.insert_one(checkin.model_dump())
            return checkin
        except DuplicateKeyError:
            raise AlreadyCheckedInError(
                f"User {checkin.user_id} already checked in today"
            )
        except PyMongoError as e:
            raise StorageFailureError(f"Could not save check-in: {e}")

    async def get_for_day(self, user_id: str, day: int) -> Optional[CheckIn]:
        doc = await self.collection.find_one({"user_id": user_id, "checkin_day": day})
        return CheckIn(**doc) if doc else None

    async def get_user_history(self, user_id: str, limit: int = 30) -> list[CheckIn]:
        """Check-ins de un usuario, los más nuevos primero"""
        cursor = self.collection.find({"user_id": user_id}).sort(
            "checkin_day", -1
        ).limit(limit)

        docs = await cursor.to_list(length=limit)
        return [CheckIn(**doc) for doc in docs]

    async def get_since(self, since: int) -> list[CheckIn]:
        """Todos los check-ins hechos desde `since` (hora exacta, inclusive)"""
        cursor = self.collection.find({"created_at": {"$gte": since}})
        docs = await cursor.to_list(length=None)
        return [CheckIn(**doc) for doc in docs]

    async def delete(self, checkin_id: int) -> bool:
        """
        Solo se usa para deshacer un check-in cuyo update de stats falló
        """
        try:
            result = await self.collection.delete_one({"checkin_id": checkin_id})
        except PyMongoError as e:
            raise StorageFailureError(f"Could not remove check-in {checkin_id}: {e}")

        return result.deleted_count > 0

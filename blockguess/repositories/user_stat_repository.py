"""
📈 UserStatRepository - Totales de check-ins por usuario
"""

from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from blockguess.core.exceptions import DuplicateSubmissionError, StorageFailureError
from blockguess.models.checkin import UserStat


class UserStatRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["user_stats"]

    async def get_by_user(self, user_id: str) -> Optional[UserStat]:
        doc = await self.collection.find_one({"user_id": user_id})
        return UserStat(**doc) if doc else None

    async def get_many(self, user_ids: list[str]) -> dict[str, UserStat]:
        """Stats de varios usuarios, indexadas por user_id"""
        cursor = self.collection.find({"user_id": {"$in": user_ids}})
        docs = await cursor.to_list(length=None)
        return {doc["user_id"]: UserStat(**doc) for doc in docs}

    async def get_top_by_points(self, limit: int = 10) -> list[UserStat]:
        cursor = self.collection.find().sort(
            [("total_points", -1), ("longest_streak", -1), ("user_id", 1)]
        ).limit(limit)

        docs = await cursor.to_list(length=limit)
        return [UserStat(**doc) for doc in docs]

    async def create(self, stat: UserStat) -> UserStat:
        """Primera fila de stats para un usuario"""
        try:
            await self.collection.insert_one(stat.model_dump())
            return stat
        except DuplicateKeyError:
            raise DuplicateSubmissionError(f"Stats for user {stat.user_id} already exist")
        except PyMongoError as e:
            raise StorageFailureError(f"Could not create stats for {stat.user_id}: {e}")

    async def replace(self, stat: UserStat, expected_last_day: int) -> bool:
        """
        Reemplaza la fila del usuario si nadie la tocó desde que se leyó

        `expected_last_day` es el last_checkin_day leído antes de calcular.
        Retorna False si otro check-in ganó la carrera.
        """
        try:
            result = await self.collection.update_one(
                {"user_id": stat.user_id, "last_checkin_day": expected_last_day},
                {"$set": stat.model_dump()}
            )
        except PyMongoError as e:
            raise StorageFailureError(f"Could not update stats for {stat.user_id}: {e}")

        return result.matched_count > 0

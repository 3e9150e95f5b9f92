"""
🎲 RoundRepository - CRUD para rounds

Las transiciones de estado son updates condicionales sobre el status actual,
así nadie ve un round a mitad de transición.
"""

from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from blockguess.core.exceptions import StorageFailureError
from blockguess.models.round import Round, ROUND_OPEN, ROUND_CLOSED, ROUND_FINISHED


class RoundRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["rounds"]

    # ============================================
    # 📌 CREATE
    # ============================================

    async def create(self, round_: Round) -> Round:
        """Inserta un round nuevo"""
        round_dict = round_.model_dump()

        try:
            await self.collection.insert_one(round_dict)
            return round_
        except DuplicateKeyError:
            raise StorageFailureError(f"Round {round_.round_id} already exists")
        except PyMongoError as e:
            raise StorageFailureError(f"Could not create round: {e}")

    # ============================================
    # 📌 READ
    # ============================================

    async def get_by_id(self, round_id: int) -> Optional[Round]:
        """Obtiene un round por ID"""
        doc = await self.collection.find_one({"round_id": round_id})
        return Round(**doc) if doc else None

    async def get_latest_active(self) -> Optional[Round]:
        """
        🔥 Round más reciente que todavía no terminó (open o closed)

        "Más reciente" = mayor round_id
        """
        cursor = self.collection.find(
            {"status": {"$in": [ROUND_OPEN, ROUND_CLOSED]}}
        ).sort("round_id", -1).limit(1)

        docs = await cursor.to_list(length=1)
        return Round(**docs[0]) if docs else None

    async def list_rounds(
        self,
        limit: int = 20,
        status: Optional[str] = None
    ) -> list[Round]:
        """Lista rounds, los más nuevos primero"""
        query = {"status": status} if status else {}
        cursor = self.collection.find(query).sort("round_id", -1).limit(limit)

        docs = await cursor.to_list(length=limit)
        return [Round(**doc) for doc in docs]

    async def find_due(self, now: int) -> list[Round]:
        """Rounds abiertos cuyo end_time ya pasó"""
        cursor = self.collection.find({
            "status": ROUND_OPEN,
            "end_time": {"$lte": now}
        }).sort("round_id", 1)

        docs = await cursor.to_list(length=None)
        return [Round(**doc) for doc in docs]

    # ============================================
    # 📌 UPDATE
    # ============================================

    async def close(self, round_id: int) -> Optional[Round]:
        """
        open -> closed

        Retorna None si el round no existe o no estaba abierto
        """
        return await self._transition(round_id, ROUND_OPEN, {"status": ROUND_CLOSED})

    async def close_due(self, now: int, round_ids: list[int]) -> int:
        """
        🔥 Cierra en batch los rounds vencidos

        Vuelve a filtrar por status y end_time: un round cerrado a mano en el
        medio no se toca.
        """
        if not round_ids:
            return 0

        try:
            result = await self.collection.update_many(
                {
                    "round_id": {"$in": round_ids},
                    "status": ROUND_OPEN,
                    "end_time": {"$lte": now}
                },
                {"$set": {"status": ROUND_CLOSED}}
            )
        except PyMongoError as e:
            raise StorageFailureError(f"Could not close due rounds: {e}")

        return result.modified_count

    async def finish(
        self,
        round_id: int,
        actual_value: int,
        reference_hash: str,
        winning_user: Optional[str],
        runner_up_user: Optional[str],
        is_jackpot: bool
    ) -> Optional[Round]:
        """
        closed -> finished, guardando el resultado

        Retorna None si el round no existe o no estaba cerrado
        """
        return await self._transition(
            round_id,
            ROUND_CLOSED,
            {
                "status": ROUND_FINISHED,
                "actual_value": actual_value,
                "reference_hash": reference_hash,
                "winning_user": winning_user,
                "runner_up_user": runner_up_user,
                "is_jackpot": is_jackpot,
            }
        )

    async def _transition(
        self,
        round_id: int,
        expected_status: str,
        updates: dict
    ) -> Optional[Round]:
        try:
            result = await self.collection.find_one_and_update(
                {"round_id": round_id, "status": expected_status},
                {"$set": updates},
                return_document=ReturnDocument.AFTER
            )
        except PyMongoError as e:
            raise StorageFailureError(f"Could not update round {round_id}: {e}")

        return Round(**result) if result else None

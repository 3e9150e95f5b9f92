"""
🎯 GuessRepository - Predicciones de usuarios por round

Un guess por (round_id, user_id). El servicio lo valida antes de insertar y
el índice único compuesto lo garantiza si dos requests llegan juntos.
"""

from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError, PyMongoError

from blockguess.core.exceptions import DuplicateSubmissionError, StorageFailureError
from blockguess.models.guess import Guess


class GuessRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["guesses"]

    # ============================================
    # 📌 CREATE
    # ============================================

    async def create(self, guess: Guess) -> Guess:
        """Crea un guess"""
        guess_dict = guess.model_dump()

        try:
            await self.collection.insert_one(guess_dict)
            return guess
        except DuplicateKeyError:
            raise DuplicateSubmissionError(
                f"User {guess.user_id} already submitted a guess for round {guess.round_id}"
            )
        except PyMongoError as e:
            raise StorageFailureError(f"Could not save guess: {e}")

    # ============================================
    # 📌 READ
    # ============================================

    async def get_user_guess_for_round(
        self,
        round_id: int,
        user_id: str
    ) -> Optional[Guess]:
        """Obtiene el guess de un usuario para un round"""
        doc = await self.collection.find_one({
            "round_id": round_id,
            "user_id": user_id
        })
        return Guess(**doc) if doc else None

    async def get_guesses_for_round(self, round_id: int) -> list[Guess]:
        """
        🔥 Obtiene TODOS los guesses de un round, en orden de llegada
        """
        cursor = self.collection.find({"round_id": round_id}).sort(
            [("submitted_at", 1), ("guess_id", 1)]
        )
        docs = await cursor.to_list(length=None)
        return [Guess(**doc) for doc in docs]

    async def exists(self, round_id: int, user_id: str) -> bool:
        """Verifica si un usuario ya mandó guess para un round"""
        count = await self.collection.count_documents(
            {"round_id": round_id, "user_id": user_id},
            limit=1
        )
        return count > 0

    async def count_for_round(self, round_id: int) -> int:
        return await self.collection.count_documents({"round_id": round_id})

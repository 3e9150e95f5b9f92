"""
🏆 PrizeConfigRepository - Configuración de premios (un solo registro)
"""

from typing import Optional
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from blockguess.core.exceptions import StorageFailureError
from blockguess.models.prize_config import PrizeConfig, PRIZE_CONFIG_ID


class PrizeConfigRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.collection = db["prize_config"]

    async def get(self) -> Optional[PrizeConfig]:
        doc = await self.collection.find_one({"config_id": PRIZE_CONFIG_ID})
        return PrizeConfig(**doc) if doc else None

    async def save(self, config: PrizeConfig) -> PrizeConfig:
        """Reemplaza (o crea) el registro único"""
        try:
            await self.collection.replace_one(
                {"config_id": PRIZE_CONFIG_ID},
                config.model_dump(),
                upsert=True
            )
        except PyMongoError as e:
            raise StorageFailureError(f"Could not save prize config: {e}")

        return config

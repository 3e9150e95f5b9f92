"""
PrizeService - Prize amounts shown to players.
"""

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from blockguess.core.clock import Clock, system_clock
from blockguess.core.exceptions import InvalidArgumentError
from blockguess.models.prize_config import PrizeConfig, PrizeConfigUpdate
from blockguess.repositories.prize_config_repository import PrizeConfigRepository
from blockguess.services.audit import AuditTrail


class PrizeService:
    def __init__(self, db: AsyncIOMotorDatabase, clock: Clock = system_clock):
        self.prize_repo = PrizeConfigRepository(db)
        self.audit = AuditTrail(db, clock)
        self.clock = clock

    async def get_config(self) -> Optional[PrizeConfig]:
        return await self.prize_repo.get()

    async def save_config(self, data: PrizeConfigUpdate) -> PrizeConfig:
        """Replace the prize configuration. Amounts must be positive."""
        if data.jackpot_amount <= 0 or data.first_place_amount <= 0 or data.second_place_amount <= 0:
            raise InvalidArgumentError("All prize amounts must be positive numbers")
        if not data.currency_type.strip():
            raise InvalidArgumentError("Currency type must be non-empty")

        config = PrizeConfig(
            jackpot_amount=data.jackpot_amount,
            first_place_amount=data.first_place_amount,
            second_place_amount=data.second_place_amount,
            currency_type=data.currency_type.strip(),
            token_contract_address=data.token_contract_address,
            updated_at=self.clock(),
        )
        await self.prize_repo.save(config)

        await self.audit.record(
            "prize_config_saved",
            f"jackpot_amount={config.jackpot_amount} first_place={config.first_place_amount} "
            f"second_place={config.second_place_amount} currency='{config.currency_type}'"
        )
        return config

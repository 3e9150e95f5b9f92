from pydantic import BaseModel

PRIZE_CONFIG_ID = 1  # un solo registro de configuración


class PrizeConfig(BaseModel):
    """Montos de premios vigentes"""

    config_id: int = PRIZE_CONFIG_ID

    jackpot_amount: int  # acierto exacto
    first_place_amount: int
    second_place_amount: int

    currency_type: str  # ej: "ETH", "USDC"
    token_contract_address: str = ""

    updated_at: int

    class Config:
        populate_by_name = True


class PrizeConfigUpdate(BaseModel):
    jackpot_amount: int
    first_place_amount: int
    second_place_amount: int
    currency_type: str
    token_contract_address: str = ""

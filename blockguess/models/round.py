from typing import Literal, Optional
from pydantic import BaseModel, Field

ROUND_OPEN = "open"
ROUND_CLOSED = "closed"
ROUND_FINISHED = "finished"

RoundStatus = Literal["open", "closed", "finished"]


class Round(BaseModel):
    """Un período de predicción atado a un bloque de Bitcoin"""

    round_id: int

    round_number: int
    prize: str  # texto libre, ej: "0.01 BTC"
    block_number: Optional[int] = None  # bloque objetivo (opcional)

    # Segundos desde epoch. end_time = start_time + duration_minutes * 60
    start_time: int
    end_time: int
    duration_minutes: int

    status: RoundStatus = ROUND_OPEN  # open | closed | finished

    # Solo se completan al finalizar (status = finished)
    actual_value: Optional[int] = None  # tx count real del bloque
    winning_user: Optional[str] = None
    runner_up_user: Optional[str] = None
    reference_hash: Optional[str] = None  # hash del bloque
    is_jackpot: Optional[bool] = None

    created_at: int

    class Config:
        populate_by_name = True


class RoundCreate(BaseModel):
    """Payload para crear un round (admin)"""

    round_number: int
    duration_minutes: int
    prize: str
    block_number: Optional[int] = None


class RoundFinalize(BaseModel):
    """Payload para cerrar el ciclo de un round con el resultado real"""

    actual_value: int = Field(..., ge=0)
    reference_hash: str

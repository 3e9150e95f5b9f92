from typing import Optional
from pydantic import BaseModel


class Guess(BaseModel):
    """Predicción de un usuario para un round (una sola por usuario y round)"""

    guess_id: int

    round_id: int
    user_id: str
    display_name: str
    guess_value: int
    avatar_url: Optional[str] = None

    submitted_at: int

    class Config:
        populate_by_name = True


class GuessCreate(BaseModel):
    user_id: str
    display_name: str
    guess_value: int
    avatar_url: Optional[str] = None

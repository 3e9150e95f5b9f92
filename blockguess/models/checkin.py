from typing import Optional
from pydantic import BaseModel


class UserStat(BaseModel):
    """Totales acumulados de check-ins de un usuario (una fila por usuario)"""

    user_id: str
    display_name: str
    avatar_url: Optional[str] = None

    total_points: int = 0
    current_streak: int = 0
    longest_streak: int = 0  # siempre >= current_streak
    last_checkin_day: int  # inicio del día UTC, no la hora exacta
    total_checkins: int = 0

    created_at: int
    updated_at: int

    class Config:
        populate_by_name = True


class CheckIn(BaseModel):
    """Registro inmutable de un check-in diario"""

    checkin_id: int

    user_id: str
    display_name: str
    avatar_url: Optional[str] = None

    checkin_day: int
    points_earned: int
    streak_count_at_checkin: int

    created_at: int

    class Config:
        populate_by_name = True


class CheckInRequest(BaseModel):
    user_id: str
    display_name: str
    avatar_url: Optional[str] = None


class CheckInResult(BaseModel):
    """Resultado de un check-in exitoso"""

    new_streak: int
    points_awarded: int
    total_points: int
    total_checkins: int
    longest_streak: int
    checkin: CheckIn


class CheckInStatus(BaseModel):
    stats: Optional[UserStat] = None
    checked_in_today: bool

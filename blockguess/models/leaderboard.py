from typing import Optional
from pydantic import BaseModel


class RoundLeaderboardEntry(BaseModel):
    """Guess de un round con su distancia al resultado (si ya hay resultado)"""

    rank: int
    user_id: str
    display_name: str
    avatar_url: Optional[str] = None
    guess_value: int
    submitted_at: int

    difference: Optional[int] = None
    is_winner: bool = False
    is_runner_up: bool = False


class WeeklyCheckInEntry(BaseModel):
    """Entrada del leaderboard semanal de check-ins"""

    user_id: str
    display_name: str
    avatar_url: Optional[str] = None
    weekly_checkins: int
    current_streak: int = 0
    total_points: int = 0

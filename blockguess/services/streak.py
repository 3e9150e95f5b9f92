"""
Daily check-in streaks and points.

Days are UTC buckets computed with epoch arithmetic, not timezone aware.
"""

from dataclasses import dataclass
from typing import Optional

from blockguess.models.checkin import UserStat

SECONDS_PER_DAY = 86_400

BASE_POINTS = 10
STREAK_BONUS_PER_DAY = 2


@dataclass(frozen=True)
class StreakOutcome:
    new_streak: int
    points_awarded: int


def day_bucket(timestamp: int) -> int:
    """Start of the UTC day containing `timestamp`."""
    return (timestamp // SECONDS_PER_DAY) * SECONDS_PER_DAY


def points_for_streak(streak: int) -> int:
    return BASE_POINTS + STREAK_BONUS_PER_DAY * streak


def accrue_streak(stat: Optional[UserStat], today: int) -> StreakOutcome:
    """
    New streak and points for a check-in on `today` (a day bucket).

    The caller has already rejected a second check-in on the same day.
    - last check-in yesterday: streak continues
    - gap of more than a day, or first check-in: streak restarts at 1
    - last check-in after yesterday (clock moved backwards): streak is kept
    """
    yesterday = today - SECONDS_PER_DAY

    if stat is None:
        new_streak = 1
    else:
        last_day = day_bucket(stat.last_checkin_day)
        if last_day == yesterday:
            new_streak = stat.current_streak + 1
        elif last_day < yesterday:
            new_streak = 1
        else:
            new_streak = max(stat.current_streak, 1)

    return StreakOutcome(new_streak=new_streak, points_awarded=points_for_streak(new_streak))


def apply_checkin(
    stat: Optional[UserStat],
    outcome: StreakOutcome,
    user_id: str,
    display_name: str,
    avatar_url: Optional[str],
    today: int,
    now: int
) -> UserStat:
    """Return the user's stats after the check-in. `stat` is not modified."""
    if stat is None:
        return UserStat(
            user_id=user_id,
            display_name=display_name,
            avatar_url=avatar_url,
            total_points=outcome.points_awarded,
            current_streak=outcome.new_streak,
            longest_streak=outcome.new_streak,
            last_checkin_day=today,
            total_checkins=1,
            created_at=now,
            updated_at=now,
        )

    return stat.model_copy(update={
        "display_name": display_name,
        "avatar_url": avatar_url,
        "total_points": stat.total_points + outcome.points_awarded,
        "current_streak": outcome.new_streak,
        "longest_streak": max(stat.longest_streak, outcome.new_streak),
        "last_checkin_day": today,
        "total_checkins": stat.total_checkins + 1,
        "updated_at": now,
    })

"""
CheckInService - Daily check-ins, streaks and check-in leaderboards.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from blockguess.core.clock import Clock, system_clock
from blockguess.core.exceptions import (
    AlreadyCheckedInError,
    DuplicateSubmissionError,
    InvalidArgumentError,
    StorageFailureError,
)
from blockguess.models.checkin import (
    CheckIn,
    CheckInRequest,
    CheckInResult,
    CheckInStatus,
    UserStat,
)
from blockguess.models.leaderboard import WeeklyCheckInEntry
from blockguess.repositories.checkin_repository import CheckInRepository
from blockguess.repositories.counter_repository import CounterRepository
from blockguess.repositories.user_stat_repository import UserStatRepository
from blockguess.services.audit import AuditTrail
from blockguess.services.streak import SECONDS_PER_DAY, accrue_streak, apply_checkin, day_bucket

logger = logging.getLogger(__name__)

WEEK_DAYS = 7


class CheckInService:
    def __init__(self, db: AsyncIOMotorDatabase, clock: Clock = system_clock):
        self.checkin_repo = CheckInRepository(db)
        self.stat_repo = UserStatRepository(db)
        self.counter_repo = CounterRepository(db)
        self.audit = AuditTrail(db, clock)
        self.clock = clock

    async def check_in(self, data: CheckInRequest) -> CheckInResult:
        """
        Daily check-in.

        One per user per UTC day. A second attempt on the same day raises
        AlreadyCheckedInError and writes nothing.

        The CheckIn row is inserted first (its unique index settles races),
        then the stats row. If the stats write fails the CheckIn is removed.
        """
        if not data.user_id.strip():
            raise InvalidArgumentError("user_id must not be empty")

        now = self.clock()
        today = day_bucket(now)

        if await self.checkin_repo.get_for_day(data.user_id, today):
            raise AlreadyCheckedInError(f"User {data.user_id} already checked in today")

        stat = await self.stat_repo.get_by_user(data.user_id)
        if stat and stat.last_checkin_day == today:
            raise AlreadyCheckedInError(f"User {data.user_id} already checked in today")

        outcome = accrue_streak(stat, today)
        updated = apply_checkin(
            stat,
            outcome,
            user_id=data.user_id,
            display_name=data.display_name,
            avatar_url=data.avatar_url,
            today=today,
            now=now,
        )

        checkin = CheckIn(
            checkin_id=await self.counter_repo.next_id("checkins"),
            user_id=data.user_id,
            display_name=data.display_name,
            avatar_url=data.avatar_url,
            checkin_day=today,
            points_earned=outcome.points_awarded,
            streak_count_at_checkin=outcome.new_streak,
            created_at=now,
        )
        await self.checkin_repo.create(checkin)

        try:
            await self._save_stats(stat, updated)
        except (DuplicateSubmissionError, StorageFailureError):
            try:
                await self.checkin_repo.delete(checkin.checkin_id)
            except StorageFailureError:
                logger.exception(
                    f"Could not remove check-in {checkin.checkin_id} after the stats write failed"
                )
            raise

        logger.info(
            f"User {data.user_id} checked in: streak={outcome.new_streak}, "
            f"points={outcome.points_awarded}"
        )
        await self.audit.record(
            "daily_checkin",
            f"user={data.user_id} streak={outcome.new_streak} "
            f"points_earned={outcome.points_awarded} total_points={updated.total_points} "
            f"total_checkins={updated.total_checkins} longest_streak={updated.longest_streak}"
        )

        return CheckInResult(
            new_streak=outcome.new_streak,
            points_awarded=outcome.points_awarded,
            total_points=updated.total_points,
            total_checkins=updated.total_checkins,
            longest_streak=updated.longest_streak,
            checkin=checkin,
        )

    async def _save_stats(self, previous: Optional[UserStat], updated: UserStat) -> None:
        if previous is None:
            await self.stat_repo.create(updated)
            return

        replaced = await self.stat_repo.replace(updated, previous.last_checkin_day)
        if not replaced:
            raise AlreadyCheckedInError(f"User {updated.user_id} already checked in today")

    # ============================================
    # 📌 QUERIES
    # ============================================

    async def get_status(self, user_id: str) -> CheckInStatus:
        """Stats for a user plus whether they already checked in today."""
        stat = await self.stat_repo.get_by_user(user_id)
        today = day_bucket(self.clock())

        return CheckInStatus(
            stats=stat,
            checked_in_today=stat is not None and stat.last_checkin_day == today,
        )

    async def get_history(self, user_id: str, limit: int = 30) -> list[CheckIn]:
        return await self.checkin_repo.get_user_history(user_id, limit)

    async def get_weekly_leaderboard(self, limit: int = 10) -> list[WeeklyCheckInEntry]:
        """
        Users with the most check-ins made in the last 7 days (by exact time).

        Ties on check-in count are broken by total points.
        """
        since = self.clock() - WEEK_DAYS * SECONDS_PER_DAY
        checkins = await self.checkin_repo.get_since(since)

        entries: dict[str, WeeklyCheckInEntry] = {}
        for c in checkins:
            entry = entries.get(c.user_id)
            if entry:
                entry.weekly_checkins += 1
            else:
                entries[c.user_id] = WeeklyCheckInEntry(
                    user_id=c.user_id,
                    display_name=c.display_name,
                    avatar_url=c.avatar_url,
                    weekly_checkins=1,
                )

        if not entries:
            return []

        stats = await self.stat_repo.get_many(list(entries.keys()))
        for user_id, entry in entries.items():
            stat = stats.get(user_id)
            if stat:
                entry.current_streak = stat.current_streak
                entry.total_points = stat.total_points

        leaderboard = sorted(
            entries.values(),
            key=lambda e: (-e.weekly_checkins, -e.total_points, e.user_id)
        )
        return leaderboard[:limit]

    async def get_points_leaderboard(self, limit: int = 10) -> list[UserStat]:
        return await self.stat_repo.get_top_by_points(limit)

"""
RoundService - Business logic for the round lifecycle.

States: open -> closed -> finished. No state is skipped and finished is
terminal. Every state-changing operation writes one audit entry.
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from blockguess.core.clock import Clock, system_clock
from blockguess.core.exceptions import (
    DuplicateSubmissionError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
    NotStartedError,
    WindowClosedError,
)
from blockguess.models.guess import Guess, GuessCreate
from blockguess.models.leaderboard import RoundLeaderboardEntry
from blockguess.models.round import Round, RoundCreate, ROUND_OPEN, ROUND_CLOSED, ROUND_FINISHED
from blockguess.repositories.counter_repository import CounterRepository
from blockguess.repositories.guess_repository import GuessRepository
from blockguess.repositories.round_repository import RoundRepository
from blockguess.services.audit import AuditTrail
from blockguess.services.ranking import compute_winners, rank_guesses

logger = logging.getLogger(__name__)


class RoundService:
    def __init__(self, db: AsyncIOMotorDatabase, clock: Clock = system_clock):
        self.round_repo = RoundRepository(db)
        self.guess_repo = GuessRepository(db)
        self.counter_repo = CounterRepository(db)
        self.audit = AuditTrail(db, clock)
        self.clock = clock

    # ============================================
    # 📌 LIFECYCLE
    # ============================================

    async def create_round(self, data: RoundCreate) -> Round:
        """
        Open a new round starting now.

        end_time is fixed at creation: start_time + duration_minutes * 60.
        """
        if data.duration_minutes <= 0:
            raise InvalidArgumentError("duration_minutes must be greater than 0")

        now = self.clock()
        round_id = await self.counter_repo.next_id("rounds")

        round_ = Round(
            round_id=round_id,
            round_number=data.round_number,
            prize=data.prize,
            block_number=data.block_number,
            start_time=now,
            end_time=now + data.duration_minutes * 60,
            duration_minutes=data.duration_minutes,
            status=ROUND_OPEN,
            created_at=now,
        )
        await self.round_repo.create(round_)

        logger.info(f"Round {round_id} (#{data.round_number}) created, ends at {round_.end_time}")
        await self.audit.record(
            "round_created",
            f"round_id={round_id}, round_number={data.round_number}, "
            f"duration_minutes={data.duration_minutes}, block_number={data.block_number}"
        )
        return round_

    async def submit_guess(self, round_id: int, data: GuessCreate) -> Guess:
        """
        Record a user's guess.

        Validates, in order:
        - user_id is not blank
        - Round exists
        - Round is open
        - start_time <= now < end_time
        - User has no guess for this round yet
        """
        if not data.user_id.strip():
            raise InvalidArgumentError("user_id must not be empty")

        round_ = await self.round_repo.get_by_id(round_id)
        if not round_:
            raise NotFoundError(f"Round {round_id} not found")

        if round_.status != ROUND_OPEN:
            raise InvalidStateError(f"Round {round_id} is not open for guesses")

        now = self.clock()
        if now < round_.start_time:
            raise NotStartedError(f"Round {round_id} has not started yet")
        if now >= round_.end_time:
            raise WindowClosedError(f"Round {round_id} has ended; no more guesses allowed")

        if await self.guess_repo.exists(round_id, data.user_id):
            raise DuplicateSubmissionError(
                f"User {data.user_id} already submitted a guess for round {round_id}"
            )

        guess_id = await self.counter_repo.next_id("guesses")
        guess = Guess(
            guess_id=guess_id,
            round_id=round_id,
            user_id=data.user_id,
            display_name=data.display_name,
            guess_value=data.guess_value,
            avatar_url=data.avatar_url,
            submitted_at=now,
        )
        await self.guess_repo.create(guess)

        await self.audit.record(
            "guess_submitted",
            f"round_id={round_id}, guess_id={guess_id}, user_id={data.user_id}, "
            f"display_name={data.display_name}, guess={data.guess_value}"
        )
        return guess

    async def close_round(self, round_id: int) -> Round:
        """Close an open round manually. Guesses are rejected from here on."""
        closed = await self.round_repo.close(round_id)
        if not closed:
            await self._raise_for_missing_or_state(round_id, "is not open")

        logger.info(f"Round {round_id} closed manually")
        await self.audit.record("round_closed", f"round_id={round_id} closed manually")
        return closed

    async def auto_close_due(self) -> int:
        """
        Close every open round whose end_time has passed.

        Safe to run any number of times: rounds already closed are filtered
        out by status, and a run with nothing due writes nothing.
        Returns the number of rounds closed.
        """
        now = self.clock()
        due = await self.round_repo.find_due(now)
        if not due:
            return 0

        round_ids = [r.round_id for r in due]
        closed_count = await self.round_repo.close_due(now, round_ids)

        if closed_count > 0:
            logger.info(f"Auto-closed {closed_count} round(s): {round_ids}")
            await self.audit.record(
                "auto_close_rounds",
                f"closed={closed_count} at {now}, round_ids={round_ids}"
            )
        return closed_count

    async def finalize_round(
        self,
        round_id: int,
        actual_value: int,
        reference_hash: str
    ) -> Round:
        """
        Finish a closed round with the real transaction count.

        The round must have been closed first: finalizing an open round or
        one already finished raises InvalidStateError.
        """
        round_ = await self.round_repo.get_by_id(round_id)
        if not round_:
            raise NotFoundError(f"Round {round_id} not found")
        if round_.status == ROUND_FINISHED:
            raise InvalidStateError(f"Round {round_id} is already finished")
        if round_.status != ROUND_CLOSED:
            raise InvalidStateError(f"Round {round_id} must be closed before finalizing")

        guesses = await self.guess_repo.get_guesses_for_round(round_id)
        result = compute_winners(actual_value, guesses)

        finished = await self.round_repo.finish(
            round_id,
            actual_value=actual_value,
            reference_hash=reference_hash,
            winning_user=result.winner,
            runner_up_user=result.runner_up,
            is_jackpot=result.is_exact_match,
        )
        if not finished:
            # Someone else moved the round between the read and the update
            await self._raise_for_missing_or_state(round_id, "is no longer closed")

        logger.info(
            f"Round {round_id} finished (winner: {result.winner}, "
            f"runner_up: {result.runner_up}, jackpot: {result.is_exact_match})"
        )
        await self.audit.record(
            "round_finished",
            f"round_id={round_id}, actual_value={actual_value}, "
            f"winner={result.winner}, runner_up={result.runner_up}, "
            f"jackpot={result.is_exact_match}, guesses={len(guesses)}, "
            f"reference_hash={reference_hash}"
        )
        return finished

    # ============================================
    # 📌 QUERIES
    # ============================================

    async def get_active_round(self) -> Optional[Round]:
        """Most recently created round that is still open or closed."""
        active = await self.round_repo.get_latest_active()

        if active:
            details = (
                f"active_round_id={active.round_id}, status={active.status}, "
                f"start_time={active.start_time}, end_time={active.end_time}"
            )
        else:
            details = "no_active_round"
        await self.audit.record("active_round_checked", details)

        return active

    async def get_round(self, round_id: int) -> Round:
        round_ = await self.round_repo.get_by_id(round_id)
        if not round_:
            raise NotFoundError(f"Round {round_id} not found")
        return round_

    async def list_rounds(self, limit: int = 20, status: Optional[str] = None) -> list[Round]:
        return await self.round_repo.list_rounds(limit, status)

    async def get_guesses(self, round_id: int) -> list[Guess]:
        await self.get_round(round_id)
        return await self.guess_repo.get_guesses_for_round(round_id)

    async def get_round_leaderboard(self, round_id: int) -> list[RoundLeaderboardEntry]:
        """
        Guesses of a round in ranking order.

        Before the round is finished there is no actual value, so guesses are
        listed in submission order with no difference.
        """
        round_ = await self.get_round(round_id)
        guesses = await self.guess_repo.get_guesses_for_round(round_id)

        if round_.status != ROUND_FINISHED or round_.actual_value is None:
            return [
                RoundLeaderboardEntry(
                    rank=idx + 1,
                    user_id=g.user_id,
                    display_name=g.display_name,
                    avatar_url=g.avatar_url,
                    guess_value=g.guess_value,
                    submitted_at=g.submitted_at,
                )
                for idx, g in enumerate(guesses)
            ]

        ranked = rank_guesses(round_.actual_value, guesses)
        return [
            RoundLeaderboardEntry(
                rank=idx + 1,
                user_id=r.guess.user_id,
                display_name=r.guess.display_name,
                avatar_url=r.guess.avatar_url,
                guess_value=r.guess.guess_value,
                submitted_at=r.guess.submitted_at,
                difference=r.distance,
                is_winner=idx == 0,
                is_runner_up=idx == 1,
            )
            for idx, r in enumerate(ranked)
        ]

    async def _raise_for_missing_or_state(self, round_id: int, reason: str):
        current = await self.round_repo.get_by_id(round_id)
        if not current:
            raise NotFoundError(f"Round {round_id} not found")
        raise InvalidStateError(f"Round {round_id} {reason} (status: {current.status})")

"""
Unit tests for RoundRepository
"""

import pytest

from blockguess.models.round import Round
from blockguess.repositories.round_repository import RoundRepository

START = 1_700_000_000


def make_round(round_id: int, status: str = "open", end_offset: int = 600) -> Round:
    return Round(
        round_id=round_id,
        round_number=round_id,
        prize="0.01 ETH",
        start_time=START,
        end_time=START + end_offset,
        duration_minutes=end_offset // 60,
        status=status,
        created_at=START,
    )


class TestRoundRepository:
    """Test suite for RoundRepository database operations."""

    @pytest.mark.asyncio
    async def test_create_and_get(self, test_db):
        repo = RoundRepository(test_db)
        await repo.create(make_round(1))

        round_ = await repo.get_by_id(1)

        assert round_ is not None
        assert round_.status == "open"
        assert round_.end_time == START + 600

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, test_db):
        repo = RoundRepository(test_db)

        assert await repo.get_by_id(99) is None

    @pytest.mark.asyncio
    async def test_latest_active_skips_finished(self, test_db):
        repo = RoundRepository(test_db)
        await repo.create(make_round(1, status="closed"))
        await repo.create(make_round(2, status="open"))
        await repo.create(make_round(3, status="finished"))

        latest = await repo.get_latest_active()

        assert latest.round_id == 2

    @pytest.mark.asyncio
    async def test_latest_active_none(self, test_db):
        repo = RoundRepository(test_db)
        await repo.create(make_round(1, status="finished"))

        assert await repo.get_latest_active() is None

    @pytest.mark.asyncio
    async def test_list_rounds_by_status(self, test_db):
        repo = RoundRepository(test_db)
        for round_id, status in [(1, "finished"), (2, "open"), (3, "finished")]:
            await repo.create(make_round(round_id, status=status))

        finished = await repo.list_rounds(status="finished")
        everything = await repo.list_rounds(limit=2)

        assert [r.round_id for r in finished] == [3, 1]
        assert [r.round_id for r in everything] == [3, 2]

    @pytest.mark.asyncio
    async def test_close_only_from_open(self, test_db):
        repo = RoundRepository(test_db)
        await repo.create(make_round(1))

        closed = await repo.close(1)
        again = await repo.close(1)

        assert closed.status == "closed"
        assert again is None

    @pytest.mark.asyncio
    async def test_find_and_close_due(self, test_db):
        repo = RoundRepository(test_db)
        await repo.create(make_round(1, end_offset=60))
        await repo.create(make_round(2, end_offset=600))
        await repo.create(make_round(3, status="closed", end_offset=60))

        due = await repo.find_due(START + 60)
        assert [r.round_id for r in due] == [1]

        assert await repo.close_due(START + 60, [r.round_id for r in due]) == 1
        assert await repo.close_due(START + 60, [1]) == 0
        assert (await repo.get_by_id(2)).status == "open"

    @pytest.mark.asyncio
    async def test_close_due_with_no_ids(self, test_db):
        repo = RoundRepository(test_db)

        assert await repo.close_due(START, []) == 0

    @pytest.mark.asyncio
    async def test_finish_requires_closed(self, test_db):
        repo = RoundRepository(test_db)
        await repo.create(make_round(1))

        assert await repo.finish(1, 3000, "00ab", "alice", None, False) is None

        await repo.close(1)
        finished = await repo.finish(1, 3000, "00ab", "alice", "bob", True)

        assert finished.status == "finished"
        assert finished.actual_value == 3000
        assert finished.reference_hash == "00ab"
        assert finished.winning_user == "alice"
        assert finished.runner_up_user == "bob"
        assert finished.is_jackpot is True

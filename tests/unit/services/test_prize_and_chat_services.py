"""
Unit tests for PrizeService and ChatService
"""

import pytest

from blockguess.core.exceptions import InvalidArgumentError
from blockguess.models.chat import ChatMessageCreate
from blockguess.models.prize_config import PrizeConfigUpdate
from blockguess.services.chat_service import ChatService
from blockguess.services.prize_service import PrizeService


@pytest.fixture
def sample_prize_data():
    return {
        "jackpot_amount": 1000,
        "first_place_amount": 100,
        "second_place_amount": 50,
        "currency_type": "USDC",
        "token_contract_address": "0x833589fcd6edb6e08f4c7c32d4f71b54bda02913",
    }


class TestPrizeService:
    """Test suite for the prize configuration."""

    @pytest.mark.asyncio
    async def test_no_config_yet(self, test_db, clock):
        service = PrizeService(test_db, clock)

        assert await service.get_config() is None

    @pytest.mark.asyncio
    async def test_save_and_replace(self, test_db, clock, sample_prize_data):
        service = PrizeService(test_db, clock)
        await service.save_config(PrizeConfigUpdate(**sample_prize_data))

        clock.advance(60)
        sample_prize_data["jackpot_amount"] = 5000
        await service.save_config(PrizeConfigUpdate(**sample_prize_data))

        config = await service.get_config()
        assert config.jackpot_amount == 5000
        assert config.updated_at == clock()
        assert await test_db["prize_config"].count_documents({}) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("field", ["jackpot_amount", "first_place_amount", "second_place_amount"])
    async def test_amounts_must_be_positive(self, test_db, clock, sample_prize_data, field):
        service = PrizeService(test_db, clock)
        sample_prize_data[field] = 0

        with pytest.raises(InvalidArgumentError):
            await service.save_config(PrizeConfigUpdate(**sample_prize_data))

    @pytest.mark.asyncio
    async def test_currency_required(self, test_db, clock, sample_prize_data):
        service = PrizeService(test_db, clock)
        sample_prize_data["currency_type"] = "   "

        with pytest.raises(InvalidArgumentError):
            await service.save_config(PrizeConfigUpdate(**sample_prize_data))


class TestChatService:
    """Test suite for chat messages."""

    @pytest.mark.asyncio
    async def test_send_and_read_newest_first(self, test_db, clock):
        service = ChatService(test_db, clock)
        await service.send_message(ChatMessageCreate(
            round_id="1", user_id="u1", display_name="one", message="gm"
        ))
        clock.advance(5)
        await service.send_message(ChatMessageCreate(
            round_id="1", user_id="u2", display_name="two", message="  3200 tx  "
        ))

        messages = await service.get_recent("1")

        assert [m.message for m in messages] == ["3200 tx", "gm"]
        assert messages[0].chat_id == 2
        assert messages[0].msg_type == "chat"

    @pytest.mark.asyncio
    async def test_filter_by_round(self, test_db, clock):
        service = ChatService(test_db, clock)
        await service.send_message(ChatMessageCreate(
            round_id="1", user_id="u1", display_name="one", message="a"
        ))
        await service.send_message(ChatMessageCreate(
            round_id="2", user_id="u1", display_name="one", message="b"
        ))

        assert len(await service.get_recent("2")) == 1
        assert len(await service.get_recent()) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message,msg_type", [
        ("   ", "chat"),
        ("x" * 501, "chat"),
        ("hello", "shout"),
    ])
    async def test_invalid_messages(self, test_db, clock, message, msg_type):
        service = ChatService(test_db, clock)

        with pytest.raises(InvalidArgumentError):
            await service.send_message(ChatMessageCreate(
                round_id="1", user_id="u1", display_name="one",
                message=message, msg_type=msg_type
            ))

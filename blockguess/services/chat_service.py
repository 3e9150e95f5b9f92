"""
ChatService - Chat messages. Plain storage, no delivery.
"""

from typing import Optional, get_args

from motor.motor_asyncio import AsyncIOMotorDatabase

from blockguess.core.clock import Clock, system_clock
from blockguess.core.exceptions import InvalidArgumentError
from blockguess.models.chat import ChatMessage, ChatMessageCreate, MessageType
from blockguess.repositories.chat_repository import ChatRepository
from blockguess.repositories.counter_repository import CounterRepository
from blockguess.services.audit import AuditTrail

MAX_MESSAGE_LENGTH = 500


class ChatService:
    def __init__(self, db: AsyncIOMotorDatabase, clock: Clock = system_clock):
        self.chat_repo = ChatRepository(db)
        self.counter_repo = CounterRepository(db)
        self.audit = AuditTrail(db, clock)
        self.clock = clock

    async def send_message(self, data: ChatMessageCreate) -> ChatMessage:
        text = data.message.strip()
        if not text:
            raise InvalidArgumentError("Message must not be empty")
        if len(text) > MAX_MESSAGE_LENGTH:
            raise InvalidArgumentError(f"Message is longer than {MAX_MESSAGE_LENGTH} characters")
        if data.msg_type not in get_args(MessageType):
            raise InvalidArgumentError(f"Unknown message type '{data.msg_type}'")

        message = ChatMessage(
            chat_id=await self.counter_repo.next_id("chat_messages"),
            round_id=data.round_id,
            user_id=data.user_id,
            display_name=data.display_name,
            message=text,
            avatar_url=data.avatar_url,
            timestamp=self.clock(),
            msg_type=data.msg_type,
        )
        await self.chat_repo.create(message)

        await self.audit.record(
            "chat_message_sent",
            f"chat_id={message.chat_id}, round_id={message.round_id}, "
            f"user_id={message.user_id}, msg_type={message.msg_type}"
        )
        return message

    async def get_recent(self, round_id: Optional[str] = None, limit: int = 100) -> list[ChatMessage]:
        return await self.chat_repo.get_recent(round_id, limit)

from typing import Literal, Optional
from pydantic import BaseModel

MessageType = Literal["guess", "system", "winner", "chat"]


class ChatMessage(BaseModel):
    """Mensaje del chat global (o de un round)"""

    chat_id: int

    round_id: str
    user_id: str
    display_name: str
    message: str
    avatar_url: Optional[str] = None

    timestamp: int
    msg_type: MessageType = "chat"

    class Config:
        populate_by_name = True


class ChatMessageCreate(BaseModel):
    round_id: str
    user_id: str
    display_name: str
    message: str
    avatar_url: Optional[str] = None
    msg_type: str = "chat"

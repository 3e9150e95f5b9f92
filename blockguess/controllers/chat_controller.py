"""
Controlador de chat - Mensajes del chat global
"""

from typing import Optional

from fastapi import APIRouter, Query, status

from blockguess.controllers.errors import to_http_exception
from blockguess.core.dependencies import Clock, Database
from blockguess.core.exceptions import GameError
from blockguess.models.chat import ChatMessage, ChatMessageCreate
from blockguess.services.chat_service import ChatService


router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("", response_model=list[ChatMessage])
async def get_messages(
    db: Database,
    clock: Clock,
    round_id: Optional[str] = Query(None, description="Filtrar por round"),
    limit: int = Query(100, ge=1, le=500)
):
    """
    Últimos mensajes del chat, los más nuevos primero.
    """
    chat_service = ChatService(db, clock)
    return await chat_service.get_recent(round_id, limit)


@router.post("", response_model=ChatMessage, status_code=status.HTTP_201_CREATED)
async def send_message(message: ChatMessageCreate, db: Database, clock: Clock):
    """
    Enviar un mensaje al chat.
    """
    chat_service = ChatService(db, clock)

    try:
        return await chat_service.send_message(message)
    except GameError as e:
        raise to_http_exception(e)

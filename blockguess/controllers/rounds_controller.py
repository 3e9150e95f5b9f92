"""
Controlador de rounds - Endpoints públicos del juego de predicción
"""

from typing import Literal, Optional

from fastapi import APIRouter, Query, status

from blockguess.controllers.errors import to_http_exception
from blockguess.core.dependencies import Clock, Database
from blockguess.core.exceptions import GameError
from blockguess.models.guess import Guess, GuessCreate
from blockguess.models.leaderboard import RoundLeaderboardEntry
from blockguess.models.round import Round
from blockguess.services.round_service import RoundService


router = APIRouter(prefix="/rounds", tags=["rounds"])


@router.get("/active", response_model=Optional[Round])
async def get_active_round(db: Database, clock: Clock):
    """
    Obtener el round activo (el más reciente que está open o closed).

    Retorna null si no hay ninguno.
    """
    round_service = RoundService(db, clock)
    return await round_service.get_active_round()


@router.get("", response_model=list[Round])
async def list_rounds(
    db: Database,
    clock: Clock,
    status_filter: Optional[Literal["open", "closed", "finished"]] = Query(None, alias="status"),
    limit: int = Query(20, ge=1, le=100)
):
    """
    Listar rounds, los más nuevos primero.
    """
    round_service = RoundService(db, clock)
    return await round_service.list_rounds(limit, status_filter)


@router.get("/{round_id}", response_model=Round)
async def get_round(round_id: int, db: Database, clock: Clock):
    """
    Obtener un round por ID.
    """
    round_service = RoundService(db, clock)

    try:
        return await round_service.get_round(round_id)
    except GameError as e:
        raise to_http_exception(e)


@router.get("/{round_id}/guesses", response_model=list[Guess])
async def get_round_guesses(round_id: int, db: Database, clock: Clock):
    """
    Obtener todos los guesses de un round, en orden de llegada.
    """
    round_service = RoundService(db, clock)

    try:
        return await round_service.get_guesses(round_id)
    except GameError as e:
        raise to_http_exception(e)


@router.get("/{round_id}/leaderboard", response_model=list[RoundLeaderboardEntry])
async def get_round_leaderboard(round_id: int, db: Database, clock: Clock):
    """
    Ranking de los guesses de un round.

    Con el round terminado se ordena por cercanía al resultado; antes, por
    orden de llegada.
    """
    round_service = RoundService(db, clock)

    try:
        return await round_service.get_round_leaderboard(round_id)
    except GameError as e:
        raise to_http_exception(e)


@router.post("/{round_id}/guesses", response_model=Guess, status_code=status.HTTP_201_CREATED)
async def submit_guess(
    round_id: int,
    guess_data: GuessCreate,
    db: Database,
    clock: Clock
):
    """
    Enviar un guess para un round abierto.

    Un solo guess por usuario y round; no se puede modificar.
    """
    round_service = RoundService(db, clock)

    try:
        return await round_service.submit_guess(round_id, guess_data)
    except GameError as e:
        raise to_http_exception(e)

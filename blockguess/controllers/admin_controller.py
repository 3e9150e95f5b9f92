"""
Controlador de Admin - Endpoints exclusivos para administradores

Todos requieren el header X-Admin-Token.
"""

from typing import Optional

from fastapi import APIRouter, Query, status
from pydantic import BaseModel

from blockguess.controllers.errors import to_http_exception
from blockguess.core.dependencies import Clock, CurrentAdmin, Database
from blockguess.core.exceptions import GameError
from blockguess.models.event_log import LogEvent
from blockguess.models.prize_config import PrizeConfig, PrizeConfigUpdate
from blockguess.models.round import Round, RoundCreate, RoundFinalize
from blockguess.services.audit import AuditTrail
from blockguess.services.prize_service import PrizeService
from blockguess.services.round_service import RoundService


router = APIRouter(prefix="/admin", tags=["admin"])


class AutoCloseResponse(BaseModel):
    """Cantidad de rounds cerrados por el barrido"""
    closed: int


# ============================================
# ROUND ENDPOINTS
# ============================================

@router.post("/rounds", response_model=Round, status_code=status.HTTP_201_CREATED)
async def create_round(
    request: RoundCreate,
    admin: CurrentAdmin,
    db: Database,
    clock: Clock
):
    """
    Abrir un round nuevo. Empieza ahora y dura duration_minutes.
    """
    round_service = RoundService(db, clock)

    try:
        return await round_service.create_round(request)
    except GameError as e:
        raise to_http_exception(e)


@router.post("/rounds/auto-close", response_model=AutoCloseResponse)
async def auto_close_rounds(admin: CurrentAdmin, db: Database, clock: Clock):
    """
    Cerrar ya todos los rounds vencidos (lo mismo que hace el ticker).
    """
    round_service = RoundService(db, clock)

    try:
        closed = await round_service.auto_close_due()
    except GameError as e:
        raise to_http_exception(e)

    return AutoCloseResponse(closed=closed)


@router.post("/rounds/{round_id}/close", response_model=Round)
async def close_round(
    round_id: int,
    admin: CurrentAdmin,
    db: Database,
    clock: Clock
):
    """
    Cerrar un round abierto a mano (no acepta más guesses).
    """
    round_service = RoundService(db, clock)

    try:
        return await round_service.close_round(round_id)
    except GameError as e:
        raise to_http_exception(e)


@router.post("/rounds/{round_id}/finalize", response_model=Round)
async def finalize_round(
    round_id: int,
    request: RoundFinalize,
    admin: CurrentAdmin,
    db: Database,
    clock: Clock
):
    """
    Registrar el tx count real del bloque y calcular ganador y segundo.

    El round tiene que estar cerrado antes.
    """
    round_service = RoundService(db, clock)

    try:
        return await round_service.finalize_round(
            round_id,
            actual_value=request.actual_value,
            reference_hash=request.reference_hash,
        )
    except GameError as e:
        raise to_http_exception(e)


# ============================================
# PRIZE CONFIG & LOGS
# ============================================

@router.put("/prize-config", response_model=PrizeConfig)
async def save_prize_config(
    request: PrizeConfigUpdate,
    admin: CurrentAdmin,
    db: Database,
    clock: Clock
):
    """
    Guardar la configuración de premios (reemplaza la anterior).
    """
    prize_service = PrizeService(db, clock)

    try:
        return await prize_service.save_config(request)
    except GameError as e:
        raise to_http_exception(e)


@router.get("/logs", response_model=list[LogEvent])
async def get_logs(
    admin: CurrentAdmin,
    db: Database,
    clock: Clock,
    event_type: Optional[str] = Query(None, description="Filtrar por tipo de evento"),
    limit: int = Query(100, ge=1, le=500)
):
    """
    Últimas entradas del log de auditoría.
    """
    audit = AuditTrail(db, clock)
    return await audit.get_recent(limit, event_type)

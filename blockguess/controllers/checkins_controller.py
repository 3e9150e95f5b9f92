"""
Controlador de check-ins - Check-in diario, rachas y leaderboards
"""

from fastapi import APIRouter, Query, status

from blockguess.controllers.errors import to_http_exception
from blockguess.core.dependencies import Clock, Database
from blockguess.core.exceptions import GameError
from blockguess.models.checkin import (
    CheckIn,
    CheckInRequest,
    CheckInResult,
    CheckInStatus,
    UserStat,
)
from blockguess.models.leaderboard import WeeklyCheckInEntry
from blockguess.services.checkin_service import CheckInService


router = APIRouter(prefix="/checkins", tags=["checkins"])


@router.post("", response_model=CheckInResult, status_code=status.HTTP_201_CREATED)
async def check_in(request: CheckInRequest, db: Database, clock: Clock):
    """
    Hacer el check-in del día.

    Un check-in por usuario por día (UTC). Suma 10 puntos más 2 por cada día
    de racha.
    """
    checkin_service = CheckInService(db, clock)

    try:
        return await checkin_service.check_in(request)
    except GameError as e:
        raise to_http_exception(e)


@router.get("/leaderboard/weekly", response_model=list[WeeklyCheckInEntry])
async def get_weekly_leaderboard(
    db: Database,
    clock: Clock,
    limit: int = Query(10, ge=1, le=100)
):
    """
    Usuarios con más check-ins en los últimos 7 días.
    """
    checkin_service = CheckInService(db, clock)
    return await checkin_service.get_weekly_leaderboard(limit)


@router.get("/leaderboard/points", response_model=list[UserStat])
async def get_points_leaderboard(
    db: Database,
    clock: Clock,
    limit: int = Query(10, ge=1, le=100)
):
    """
    Usuarios con más puntos acumulados por check-ins.
    """
    checkin_service = CheckInService(db, clock)
    return await checkin_service.get_points_leaderboard(limit)


@router.get("/{user_id}", response_model=CheckInStatus)
async def get_checkin_status(user_id: str, db: Database, clock: Clock):
    """
    Stats de check-in de un usuario y si ya hizo el check-in hoy.
    """
    checkin_service = CheckInService(db, clock)
    return await checkin_service.get_status(user_id)


@router.get("/{user_id}/history", response_model=list[CheckIn])
async def get_checkin_history(
    user_id: str,
    db: Database,
    clock: Clock,
    limit: int = Query(30, ge=1, le=365)
):
    """
    Historial de check-ins de un usuario, los más nuevos primero.
    """
    checkin_service = CheckInService(db, clock)
    return await checkin_service.get_history(user_id, limit)

"""
Controlador de premios - Configuración pública de premios
"""

from typing import Optional

from fastapi import APIRouter

from blockguess.core.dependencies import Clock, Database
from blockguess.models.prize_config import PrizeConfig
from blockguess.services.prize_service import PrizeService


router = APIRouter(prefix="/prize-config", tags=["prizes"])


@router.get("", response_model=Optional[PrizeConfig])
async def get_prize_config(db: Database, clock: Clock):
    """
    Obtener la configuración de premios vigente (null si no hay).
    """
    prize_service = PrizeService(db, clock)
    return await prize_service.get_config()

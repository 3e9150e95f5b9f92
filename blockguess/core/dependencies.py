"""
Dependencies de FastAPI para autenticación de admin, reloj e inyección de BD
"""

import secrets
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, status
from motor.motor_asyncio import AsyncIOMotorDatabase

from blockguess.core.clock import Clock as ClockFn, system_clock
from blockguess.core.config import get_settings
from blockguess.database import get_database


def get_clock() -> ClockFn:
    """Reloj del juego (los tests lo reemplazan con dependency_overrides)"""
    return system_clock


async def require_admin(
    x_admin_token: Annotated[Optional[str], Header()] = None
) -> None:
    """
    Dependency que valida el token de administrador.

    Se usa en los endpoints de /admin. Si no hay token configurado en el
    servidor, nadie es admin.
    """
    settings = get_settings()

    if not settings.admin_token:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Endpoints de administración deshabilitados",
        )

    if not x_admin_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Falta el header X-Admin-Token",
        )

    if not secrets.compare_digest(x_admin_token, settings.admin_token):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Token de administrador inválido",
        )


# Alias de tipos para que se vea mas limpio en los endpoints
Database = Annotated[AsyncIOMotorDatabase, Depends(get_database)]
Clock = Annotated[ClockFn, Depends(get_clock)]
CurrentAdmin = Annotated[None, Depends(require_admin)]

"""
Entry point de la API
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blockguess.core.config import get_settings
from blockguess.database import Database, create_indexes
from blockguess.services.ticker import AutoCloseTicker

from blockguess.controllers.health_controller import router as health_router
from blockguess.controllers.rounds_controller import router as rounds_router
from blockguess.controllers.checkins_controller import router as checkins_router
from blockguess.controllers.prize_controller import router as prize_router
from blockguess.controllers.chat_controller import router as chat_router
from blockguess.controllers.admin_controller import router as admin_router

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Parse CORS origins
CORS_ORIGINS = [origin.strip() for origin in settings.cors_origins.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    await Database.connect()
    await create_indexes(Database.get_db())

    # El ticker cierra los rounds vencidos cada N segundos
    ticker = None
    if settings.auto_close_enabled:
        ticker = AutoCloseTicker(Database.get_db, settings.auto_close_interval_seconds)
        ticker.start()
    else:
        logger.info("Auto-close ticker disabled (AUTO_CLOSE_ENABLED=false)")

    yield

    if ticker:
        await ticker.stop()
    await Database.disconnect()

# Creo la app
app = FastAPI(
    title="Block Guess API",
    description="Backend del juego de predicción de transacciones por bloque de Bitcoin",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Agrego todos los routers de los controllers al app
app.include_router(health_router)
app.include_router(rounds_router)
app.include_router(checkins_router)
app.include_router(prize_router)
app.include_router(chat_router)
app.include_router(admin_router)


@app.get("/")
async def root():
    # Endpoint raíz, sirve para verificar que la API está levantada
    return {
        "name": "Block Guess API",
        "version": "1.0.0",
        "docs": "/docs"  # Link a la documentación interactiva de Swagger
    }

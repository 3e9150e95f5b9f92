"""
🔌 Database Connection Setup - MongoDB

Configuración centralizada para conectar a MongoDB
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from blockguess.core.config import get_settings

logger = logging.getLogger(__name__)


class Database:
    """Singleton para la conexión a MongoDB"""

    client: Optional[AsyncIOMotorClient] = None
    db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    async def connect(cls):
        """Conecta a MongoDB"""
        if cls.client is None:
            settings = get_settings()

            if not settings.mongodb_uri:
                raise ValueError("MONGODB_URI not found in environment variables")

            cls.client = AsyncIOMotorClient(
                settings.mongodb_uri,
                maxPoolSize=10,
                minPoolSize=2,
            )

            db_name = settings.mongodb_db_name
            cls.db = cls.client[db_name]

            # Test de conexión
            await cls.client.admin.command("ping")
            logger.info(f"✅ Connected to MongoDB: {db_name}")

    @classmethod
    async def disconnect(cls):
        """Cierra la conexión"""
        if cls.client is not None:
            cls.client.close()
            cls.client = None
            cls.db = None
            logger.info("❌ Disconnected from MongoDB")

    @classmethod
    def get_db(cls) -> AsyncIOMotorDatabase:
        """Retorna la instancia de la base de datos"""
        if cls.db is None:
            raise RuntimeError("Database not connected. Call Database.connect() first.")
        return cls.db


# ============================================
# 🎯 DEPENDENCY para FastAPI
# ============================================

async def get_database() -> AsyncIOMotorDatabase:
    """
    FastAPI dependency para inyectar la DB

    Uso:
        @router.get("/rounds/{round_id}")
        async def get_round(round_id: int, db: Database):
            service = RoundService(db)
            return await service.get_round(round_id)
    """
    return Database.get_db()


# ============================================
# 🏗️ CREAR ÍNDICES (idempotente, corre al arrancar)
# ============================================

async def create_indexes(db: AsyncIOMotorDatabase):
    """
    Crea los índices necesarios para las queries y para las reglas de unicidad

    - un guess por (round_id, user_id)
    - un check-in por (user_id, checkin_day)
    """
    # Índices para rounds
    await db["rounds"].create_index("round_id", unique=True)
    await db["rounds"].create_index("status")
    await db["rounds"].create_index([("status", 1), ("end_time", 1)])

    # Índices para guesses
    await db["guesses"].create_index("guess_id", unique=True)
    await db["guesses"].create_index([("round_id", 1), ("user_id", 1)], unique=True)
    await db["guesses"].create_index([("round_id", 1), ("submitted_at", 1)])

    # Índices para check-ins y stats
    await db["user_stats"].create_index("user_id", unique=True)
    await db["user_stats"].create_index([("total_points", -1)])
    await db["checkins"].create_index("checkin_id", unique=True)
    await db["checkins"].create_index([("user_id", 1), ("checkin_day", 1)], unique=True)
    await db["checkins"].create_index("checkin_day")
    await db["checkins"].create_index("created_at")

    # Índices para logs y chat
    await db["logs"].create_index("log_id", unique=True)
    await db["logs"].create_index([("timestamp", -1)])
    await db["chat_messages"].create_index("chat_id", unique=True)
    await db["chat_messages"].create_index([("round_id", 1), ("timestamp", -1)])

    logger.info("✅ Indexes created successfully")

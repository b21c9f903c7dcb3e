# invoicer/db/database.py
import asyncio
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from invoicer.core.config import settings

logger = logging.getLogger(__name__)

# ------------------------
# MongoDB setup
# ------------------------
client = AsyncIOMotorClient(
    settings.MONGO_URL,
    serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
    connectTimeoutMS=settings.MONGO_TIMEOUT_MS,
    socketTimeoutMS=settings.MONGO_TIMEOUT_MS,
    uuidRepresentation="standard",
)
db = client[settings.MONGO_DB_NAME]

USERS = "users"
SYSTEM = "system"


def get_db() -> AsyncIOMotorDatabase:
    """Dependency returning the shared database handle."""
    return db


async def ensure_indexes(database: AsyncIOMotorDatabase) -> None:
    await database[USERS].create_index("email", unique=True)


async def check_connection(database: AsyncIOMotorDatabase, timeout: float = 5) -> bool:
    try:
        await asyncio.wait_for(database.command("ping"), timeout=timeout)
        logger.info("MongoDB connected successfully.")
        return True
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        return False

# storefront/db/mongo.py
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from storefront.core.config import get_settings
import certifi
import logging

logger = logging.getLogger(__name__)

_client: AsyncIOMotorClient | None = None
_db: AsyncIOMotorDatabase | None = None


def get_client() -> AsyncIOMotorClient:
    assert _client is not None, "Mongo client not initialized"
    return _client


def get_db() -> AsyncIOMotorDatabase:
    assert _db is not None, "Mongo DB not initialized"
    return _db


async def connect():
    """
    Create the Motor client. Remote (mongodb+srv) URIs get TLS with the
    certifi CA bundle. A failed startup ping is logged but not fatal: the
    client stays lazy and the first real query retries the connection.
    """
    global _client, _db
    settings = get_settings()
    uri = settings.MONGO_URI or "mongodb://localhost:27017"

    tls_opts = {"tls": True, "tlsCAFile": certifi.where()} if uri.startswith("mongodb+srv://") else {}
    _client = AsyncIOMotorClient(
        uri,
        uuidRepresentation="standard",
        serverSelectionTimeoutMS=6000,
        connectTimeoutMS=6000,
        **tls_opts,
    )
    _db = _client[settings.MONGO_DB]

    try:
        await _client.admin.command("ping")
        logger.info("Mongo connected (ping ok) db=%s", settings.MONGO_DB)
    except Exception as e:
        logger.warning("Mongo ping at startup failed, will connect lazily on first query: %s", e)


async def disconnect():
    global _client, _db
    if _client:
        _client.close()
    _client = None
    _db = None

# pourover/db/init.py
# Motor connection lifecycle for the recipe store (startup → shutdown)

from __future__ import annotations
import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from pourover.core.config import settings

log = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_db: Optional[AsyncIOMotorDatabase] = None

def _make_client(uri: str) -> AsyncIOMotorClient:
    # short server selection so each startup attempt fails fast
    return AsyncIOMotorClient(
        uri,
        serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
        appname="pourover",
    )

def is_connected() -> bool:
    return _db is not None

async def init_db(uri: Optional[str] = None, name: Optional[str] = None) -> AsyncIOMotorDatabase:
    """
    Connect once per process and return the recipe database.
    Repeat calls reuse the live connection; a failed ping leaves nothing behind.
    """
    global _client, _db
    if _db is not None:
        return _db

    name = name or settings.MONGO_DB
    client = _make_client(uri or settings.MONGO_URI)
    db = client[name]
    try:
        await db.command("ping")
    except Exception:
        client.close()
        raise

    _client, _db = client, db
    log.info("connected to mongo db=%s", name)
    return db

async def close_db() -> None:
    global _client, _db
    if _client is not None:
        _client.close()
        log.info("mongo connection closed")
    _client, _db = None, None

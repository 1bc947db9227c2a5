"""
backend/livescores/database.py

Purpose:
    MongoDB connection bootstrap for the persistent KV scopes.

Dependencies:
    - motor.motor_asyncio
    - livescores.config
"""

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from livescores.config import settings

client: AsyncIOMotorClient = None
db: AsyncIOMotorDatabase = None

logger = logging.getLogger("livescores.database")


async def connect_db() -> AsyncIOMotorDatabase:
    global client, db
    client = AsyncIOMotorClient(settings.MONGO_URI, maxPoolSize=5)
    db = client[settings.MONGO_DB]
    await db.kv_store.create_index("scope")
    logger.info("Connected to MongoDB database %s", settings.MONGO_DB)
    return db


async def close_db() -> None:
    global client
    if client:
        client.close()

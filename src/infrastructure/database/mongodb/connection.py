# File: infrastructure/database/mongodb/connection.py

import asyncio
from enum import Enum
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from common.config.settings import settings
from common.exceptions.base_exception import ServiceUnavailableException
from common.logging.logger import log_info, log_error


class ConnectionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"


class MongoDBConnection:
    """
    Process-wide Motor client, created lazily on first use.

    Concurrent callers of ``connect`` wait on the same lock and all end up with
    the single READY client; a failed attempt resets the state so the next
    caller retries.
    """

    _client: Optional[AsyncIOMotorClient] = None
    _db: Optional[AsyncIOMotorDatabase] = None
    _state: ConnectionState = ConnectionState.UNINITIALIZED
    _lock: Optional[asyncio.Lock] = None

    @classmethod
    def state(cls) -> ConnectionState:
        return cls._state

    @classmethod
    async def connect(cls) -> AsyncIOMotorDatabase:
        if cls._state is ConnectionState.READY:
            return cls._db

        if cls._lock is None:
            cls._lock = asyncio.Lock()

        async with cls._lock:
            if cls._state is ConnectionState.READY:
                return cls._db

            cls._state = ConnectionState.INITIALIZING
            mongo_uri = settings.MONGO_URI or "mongodb://localhost:27017"
            timeout = settings.MONGO_TIMEOUT

            try:
                log_info("Attempting MongoDB connection", extra={"db": settings.MONGO_DB, "timeout": timeout})

                client = AsyncIOMotorClient(mongo_uri, serverSelectionTimeoutMS=timeout)
                await client.admin.command("ping")

                cls._client = client
                cls._db = client[settings.MONGO_DB]
                cls._state = ConnectionState.READY

                log_info("MongoDB connection established", extra={"db": settings.MONGO_DB})
                return cls._db

            except Exception as e:
                cls._state = ConnectionState.UNINITIALIZED
                log_error("MongoDB connection failed", extra={
                    "db": settings.MONGO_DB,
                    "timeout": timeout,
                    "error": str(e)
                }, exc_info=True)
                raise ServiceUnavailableException("MongoDB unavailable")

    @classmethod
    async def disconnect(cls):
        if cls._client is not None:
            cls._client.close()
            log_info("MongoDB connection closed", extra={"db": settings.MONGO_DB})
        cls._client = None
        cls._db = None
        cls._state = ConnectionState.UNINITIALIZED

    @classmethod
    def get_db(cls) -> AsyncIOMotorDatabase:
        if cls._state is not ConnectionState.READY:
            log_error("Attempt to access MongoDB before connection was established")
            raise ServiceUnavailableException("MongoDB not connected. Call connect() first.")
        return cls._db


async def get_mongo_db() -> AsyncIOMotorDatabase:
    return await MongoDBConnection.connect()

# File: infrastructure/database/redis/redis_client.py

from typing import Optional

from redis.asyncio import Redis, ConnectionPool
from redis.exceptions import RedisError

from common.config.settings import settings
from common.exceptions.base_exception import ServiceUnavailableException
from common.logging.logger import log_info, log_error

# Shared pool for the rate limiter, created at startup
redis_pool: Optional[ConnectionPool] = None
redis_client: Optional[Redis] = None


async def init_redis_pool() -> ConnectionPool:
    """Initialize Redis connection pool with settings from .env."""
    global redis_pool, redis_client
    try:
        connection_kwargs = {
            "host": settings.REDIS_HOST,
            "port": settings.REDIS_PORT,
            "db": settings.REDIS_DB,
            "decode_responses": True
        }
        if settings.REDIS_PASSWORD and settings.REDIS_PASSWORD.strip():
            connection_kwargs["password"] = settings.REDIS_PASSWORD

        redis_pool = ConnectionPool(**connection_kwargs)
        redis_client = Redis(connection_pool=redis_pool)
        await redis_client.ping()
        log_info("Redis connection established", extra={
            "host": settings.REDIS_HOST,
            "port": settings.REDIS_PORT,
            "db": settings.REDIS_DB
        })

    except RedisError as e:
        log_error("Redis connection failed", extra={"error": str(e), "host": settings.REDIS_HOST}, exc_info=True)
        raise ServiceUnavailableException("Redis unavailable")

    return redis_pool


async def close_redis_pool():
    global redis_pool, redis_client
    if redis_client:
        await redis_client.aclose()
    if redis_pool:
        await redis_pool.disconnect()
    log_info("Redis connection pool closed")
    redis_pool = None
    redis_client = None


async def get_redis_client() -> Redis:
    """Return the shared client, reconnecting when the pool is gone."""
    if redis_client is None:
        await init_redis_pool()
    return redis_client

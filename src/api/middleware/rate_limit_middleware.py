# File: src/api/middleware/rate_limit_middleware.py

from typing import Awaitable, Callable, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from common.config.settings import settings
from common.exceptions.base_exception import ServiceUnavailableException
from common.exceptions.exception_handlers import build_error_response
from common.logging.logger import log_warning
from common.translations.messages import get_message
from common.utils.ip_utils import extract_client_ip
from infrastructure.database.redis.redis_client import get_redis_client

EXEMPT_PATHS = ("/health", "/docs", "/redoc", "/openapi.json", "/favicon.ico")


class FixedWindowRateLimiter:
    """
    Counts requests per client in fixed windows of ``window`` seconds.

    The first hit of a window sets the key expiry, so the counter resets on
    its own when the window closes.
    """

    def __init__(self, redis: Redis, limit: int, window: int, prefix: str = "rate-limit"):
        self.redis = redis
        self.limit = limit
        self.window = window
        self.prefix = prefix

    async def hit(self, client_id: str) -> bool:
        key = f"{self.prefix}:{client_id}"
        count = await self.redis.incr(key)
        if count == 1:
            await self.redis.expire(key, self.window)
        return count <= self.limit


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app,
        limit: Optional[int] = None,
        window: Optional[int] = None,
        redis_factory: Callable[[], Awaitable[Redis]] = get_redis_client,
    ):
        super().__init__(app)
        self.limit = limit or settings.RATE_LIMIT_REQUESTS
        self.window = window or settings.RATE_LIMIT_WINDOW
        self.redis_factory = redis_factory

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        client_ip = extract_client_ip(request)
        try:
            limiter = FixedWindowRateLimiter(await self.redis_factory(), self.limit, self.window)
            allowed = await limiter.hit(client_ip)
        except (RedisError, ServiceUnavailableException) as e:
            # Requests are let through while Redis is unreachable
            log_warning("Rate limiter unavailable", extra={"ip": client_ip, "error": str(e)})
            return await call_next(request)

        if not allowed:
            log_warning("Rate limit exceeded", extra={
                "ip": client_ip,
                "path": request.url.path,
                "limit": self.limit,
                "window": self.window
            })
            response = build_error_response(429, detail=get_message("rate_limit.exceeded"))
            response.headers["Retry-After"] = str(self.window)
            return response

        return await call_next(request)

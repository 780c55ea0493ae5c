# File: src/api/middleware/error_middleware.py

import sentry_sdk
from fastapi.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from common.exceptions.exception_handlers import build_error_response
from common.logging.logger import log_error
from common.translations.messages import get_message
from common.utils.ip_utils import extract_client_ip


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Last line of defence for errors that escape the registered exception handlers."""

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)

        except HTTPException:
            raise

        except Exception as exc:
            log_error("Unhandled error in middleware", extra={
                "path": request.url.path,
                "method": request.method,
                "error": str(exc),
                "client_ip": extract_client_ip(request),
            }, exc_info=True)
            sentry_sdk.capture_exception(exc)
            return build_error_response(500, detail=get_message("server.error"))

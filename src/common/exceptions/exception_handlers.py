# File: common/exceptions/exception_handlers.py

from typing import Optional

import sentry_sdk
from fastapi import FastAPI, Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from common.logging.logger import log_error, log_warning
from common.schemas.standard_response import ErrorResponse

ERROR_CODES = {
    400: "VALIDATION_ERROR",
    404: "NOT_FOUND",
    409: "CONFLICT",
    429: "RATE_LIMITED",
    500: "INTERNAL_ERROR",
    502: "UPSTREAM_ERROR",
    503: "SERVICE_UNAVAILABLE",
}


def build_error_response(status_code: int, detail: str, message: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse.from_exception(
            detail=detail,
            message=message,
            error_code=ERROR_CODES.get(status_code),
        ).model_dump()
    )


def register_exception_handlers(app: FastAPI):
    """
    Register global exception handlers for all expected error types.
    """

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handles Pydantic validation errors (e.g., missing fields, wrong types, etc.)
        """
        details = []
        for err in exc.errors():
            loc = err.get("loc", [])
            msg = err.get("msg", "Invalid input.")
            field = ".".join(str(part) for part in loc[1:]) if len(loc) > 1 else (loc[-1] if loc else "field")
            details.append(f"{field}: {msg}")

        error_message = "; ".join(details)

        log_warning("Validation error", extra={
            "path": request.url.path,
            "method": request.method,
            "errors": error_message
        })

        return build_error_response(HTTP_400_BAD_REQUEST, detail=error_message)

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """
        Handles all HTTP exceptions (including custom ones).
        """
        log_error("HTTPException caught", extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
            "detail": str(exc.detail),
        })
        if exc.status_code >= 500:
            sentry_sdk.capture_exception(exc)

        return build_error_response(status_code=exc.status_code, detail=str(exc.detail))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Handles uncaught general exceptions.
        """
        log_error("Unhandled exception", extra={
            "path": request.url.path,
            "method": request.method,
            "error": str(exc),
        }, exc_info=True)
        sentry_sdk.capture_exception(exc)

        return build_error_response(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error occurred."
        )

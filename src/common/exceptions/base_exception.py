# File: common/exceptions/base_exception.py

from fastapi import HTTPException, status


class AppHTTPException(HTTPException):
    def __init__(self, status_code: int, detail: str):
        super().__init__(status_code=status_code, detail=detail)


class NotFoundException(AppHTTPException):
    def __init__(self, detail: str = "Resource not found."):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class BadRequestException(AppHTTPException):
    """Raised when mandatory input is missing, e.g. the English variant of a localized field."""

    def __init__(self, detail: str = "Invalid request parameters."):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


class ConflictException(AppHTTPException):
    def __init__(self, detail: str = "Resource conflict detected."):
        super().__init__(status.HTTP_409_CONFLICT, detail)


class UpstreamServiceException(AppHTTPException):
    """Raised when the object-storage provider rejects or fails an operation."""

    def __init__(self, service: str, detail: str = "Upstream service failed."):
        self.service = service
        super().__init__(status.HTTP_502_BAD_GATEWAY, f"{service}: {detail}")


class ServiceUnavailableException(AppHTTPException):
    def __init__(self, detail: str = "Service temporarily unavailable. Please try again later."):
        super().__init__(status.HTTP_503_SERVICE_UNAVAILABLE, detail)

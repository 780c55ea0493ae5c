# File: common/utils/ip_utils.py

from starlette.requests import Request


def extract_client_ip(request: Request) -> str:
    """Extract the client's IP address from the request headers or client host."""
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"

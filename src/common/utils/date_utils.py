# File: common/utils/date_utils.py

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Returns current UTC time as aware datetime."""
    return datetime.now(timezone.utc)

# File: src/common/utils/string_utils.py
import re
import secrets
import string
import unicodedata
from datetime import datetime

from bson import ObjectId

ALPHANUMERIC = string.ascii_letters + string.digits


def slugify(text: str) -> str:
    """
    Converts text to a lowercase url-safe slug: accents are transliterated,
    other symbols removed and runs of whitespace/hyphens collapsed to one hyphen.
    """
    text = unicodedata.normalize("NFKD", text or "")
    text = text.encode("ascii", "ignore").decode("ascii")
    text = re.sub(r"[^a-zA-Z0-9\s-]", "", text).lower()
    text = re.sub(r"[\s_-]+", "-", text).strip("-")
    return text


def generate_random_string(length: int = 6) -> str:
    """
    Generates a random alphanumeric string of given length using secrets.
    """
    return "".join(secrets.choice(ALPHANUMERIC) for _ in range(length))


def unique_preserving_order(values) -> list:
    """
    Drop duplicate entries while keeping the first occurrence of each.
    """
    seen = set()
    result = []
    for value in values or []:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def json_default(obj):
    """Fallback serializer for ObjectId and datetime values."""
    if isinstance(obj, ObjectId):
        return str(obj)
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, set):
        return list(obj)
    return str(obj)

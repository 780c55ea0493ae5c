# File: common/utils/pagination.py

from math import ceil
from typing import Any, List, Dict, Tuple


def page_window(page: int, limit: int) -> Tuple[int, int, int]:
    """
    Clamp page and limit to at least 1 and compute the number of documents to skip.

    Returns:
        Tuple[int, int, int]: (page, limit, skip)
    """
    page = max(1, int(page))
    limit = max(1, int(limit))
    return page, limit, (page - 1) * limit


def paginate_response(
    items: List[Any],
    total: int,
    page: int = 1,
    page_size: int = 20
) -> Dict[str, Any]:
    """
    Build a standard pagination response.

    Args:
        items (List[Any]): Items of the current page.
        total (int): Size of the whole filtered set, not of the page.
        page (int): Current page number.
        page_size (int): Number of items per page.

    Returns:
        Dict[str, Any]: Standardized paginated response.
    """
    return {
        "items": items,
        "meta": {
            "total": total,
            "item_count": len(items),
            "page": page,
            "page_size": page_size,
            "pages": ceil(total / page_size) if page_size > 0 else 0
        }
    }

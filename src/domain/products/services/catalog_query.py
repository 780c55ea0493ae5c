# File: domain/products/services/catalog_query.py

import asyncio
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from common.logging.logger import log_info
from common.utils.pagination import page_window
from infrastructure.database.mongodb.repository import MongoRepository

# Ties on position fall back to _id, i.e. insertion order.
CATALOG_SORT = [("position", 1), ("_id", 1)]
SEARCHED_LOCALIZED_FIELDS = ("title", "description")


@dataclass
class CatalogFilters:
    """
    Attributes:
        available: Only available (True) / unavailable (False) products; None disables the filter.
        category: Exact category match.
        search: Case-insensitive substring searched across localized titles and
            descriptions, tags and shortId.
    """

    available: Optional[bool] = None
    category: Optional[str] = None
    search: Optional[str] = None


def build_search_clause(term: str, languages: Iterable[str]) -> Dict[str, Any]:
    pattern = {"$regex": re.escape(term), "$options": "i"}
    alternatives = [
        {f"{field}.{lang}": pattern}
        for field in SEARCHED_LOCALIZED_FIELDS
        for lang in languages
    ]
    alternatives.append({"tags": pattern})
    alternatives.append({"shortId": pattern})
    return {"$or": alternatives}


def build_catalog_filter(filters: CatalogFilters, languages: Iterable[str]) -> Dict[str, Any]:
    """AND of the availability/category filters around the OR-group of the search."""
    clauses: List[Dict[str, Any]] = []

    if filters.available is not None:
        clauses.append({"logistics.isAvailable": filters.available})
    if filters.category:
        clauses.append({"category": filters.category})

    term = (filters.search or "").strip()
    if term:
        clauses.append(build_search_clause(term, languages))

    if not clauses:
        return {}
    if len(clauses) == 1:
        return clauses[0]
    return {"$and": clauses}


class CatalogQueryEngine:
    def __init__(self, repo: MongoRepository, languages: Iterable[str]):
        self.repo = repo
        self.languages = list(dict.fromkeys(languages))

    async def query(
        self,
        filters: CatalogFilters,
        page: int = 1,
        limit: int = 10,
        transform: Optional[Callable[[Dict[str, Any]], Any]] = None,
    ) -> Tuple[List[Any], int]:
        """
        Return one page of the filtered catalog, sorted by position, and the
        size of the whole filtered set.
        """
        query = build_catalog_filter(filters, self.languages)
        page, limit, skip = page_window(page, limit)

        items, total = await asyncio.gather(
            self.repo.find_with_pagination(query, skip=skip, limit=limit, sort=CATALOG_SORT),
            self.repo.count(query),
        )

        log_info("Catalog query executed", extra={
            "filters": str(filters),
            "page": page,
            "limit": limit,
            "total": total,
            "returned": len(items)
        })

        if transform is not None:
            items = [transform(item) for item in items]
        return items, total

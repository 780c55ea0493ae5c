# File: domain/products/services/stats_service.py

from typing import Any, Dict, List

from common.logging.logger import log_info
from infrastructure.database.mongodb.repository import MongoRepository


def build_stats_pipeline() -> List[Dict[str, Any]]:
    """
    One $facet stage, so total, available and per-category counts are all
    computed from the same read.
    """
    return [
        {
            "$facet": {
                "totalCount": [{"$count": "count"}],
                "availableCount": [
                    {"$match": {"logistics.isAvailable": True}},
                    {"$count": "count"},
                ],
                "byCategory": [
                    {"$group": {"_id": "$category", "count": {"$sum": 1}}},
                    {"$sort": {"count": -1, "_id": 1}},
                ],
            }
        }
    ]


def _first_count(facet: List[Dict[str, Any]]) -> int:
    return facet[0].get("count", 0) if facet else 0


class ProductStatsAggregator:
    def __init__(self, repo: MongoRepository):
        self.repo = repo

    async def stats(self) -> Dict[str, Any]:
        rows = await self.repo.aggregate(build_stats_pipeline())
        facets = rows[0] if rows else {}

        result = {
            "total": _first_count(facets.get("totalCount", [])),
            "available": _first_count(facets.get("availableCount", [])),
            "breakdown": [
                {"category": bucket["_id"], "count": bucket["count"]}
                for bucket in facets.get("byCategory", [])
            ],
        }
        log_info("Product stats aggregated", extra={"total": result["total"], "available": result["available"]})
        return result

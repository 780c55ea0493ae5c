# File: infrastructure/database/mongodb/repository.py

from typing import Any, Dict, List, Optional, Sequence, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from common.exceptions.base_exception import ConflictException, ServiceUnavailableException
from common.logging.logger import log_info, log_error, log_warning

SortSpec = Optional[List[Tuple[str, int]]]


class MongoRepository:
    """
    Thin async wrapper over one Motor collection.

    Ids go out as strings and come back in as strings; a unique-index violation
    surfaces as ConflictException, any other driver error as
    ServiceUnavailableException.
    """

    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str):
        self.db = db
        self.collection = db[collection_name]

    @staticmethod
    def _convert_to_objectid(value: Any) -> Any:
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        return value

    def _prepare_query(self, query: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        prepared = dict(query or {})
        if "_id" in prepared:
            prepared["_id"] = self._convert_to_objectid(prepared["_id"])
        return prepared

    @staticmethod
    def _stringify_id(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if document and "_id" in document:
            document["_id"] = str(document["_id"])
        return document

    def _conflict(self, operation: str, error: DuplicateKeyError) -> ConflictException:
        key = ", ".join((error.details or {}).get("keyValue", {}).keys()) or "unique key"
        log_warning(f"Mongo {operation} duplicate key", extra={"collection": self.collection.name, "key": key})
        return ConflictException(f"Duplicate value for {key}")

    async def insert_one(self, document: Dict[str, Any]) -> str:
        try:
            if "_id" in document and isinstance(document["_id"], str):
                document["_id"] = self._convert_to_objectid(document["_id"])
            result = await self.collection.insert_one(document)
            inserted_id = str(result.inserted_id)
            document["_id"] = inserted_id
            log_info("Mongo insert_one", extra={"collection": self.collection.name, "id": inserted_id})
            return inserted_id
        except DuplicateKeyError as e:
            document.pop("_id", None)
            raise self._conflict("insert_one", e)
        except Exception as e:
            log_error("Mongo insert_one failed", extra={"collection": self.collection.name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to insert document: Internal DB error")

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            query = self._prepare_query(query)
            result = self._stringify_id(await self.collection.find_one(query))
            log_info("Mongo find_one", extra={"collection": self.collection.name, "query": str(query), "found": bool(result)})
            return result
        except Exception as e:
            log_error("Mongo find_one failed", extra={"collection": self.collection.name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to find document: Internal DB error")

    async def find(self, query: Dict[str, Any], sort: SortSpec = None) -> List[Dict[str, Any]]:
        try:
            query = self._prepare_query(query)
            cursor = self.collection.find(query)
            if sort:
                cursor = cursor.sort(sort)
            result = [self._stringify_id(doc) for doc in await cursor.to_list(length=None)]
            log_info("Mongo find", extra={"collection": self.collection.name, "query": str(query), "count": len(result)})
            return result
        except Exception as e:
            log_error("Mongo find failed", extra={"collection": self.collection.name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to fetch documents: Internal DB error")

    async def find_with_pagination(self, query: Dict[str, Any], skip: int = 0, limit: int = 10, sort: SortSpec = None) -> List[Dict[str, Any]]:
        try:
            query = self._prepare_query(query)
            cursor = self.collection.find(query)
            if sort:
                cursor = cursor.sort(sort)
            cursor = cursor.skip(skip).limit(limit)
            result = [self._stringify_id(doc) for doc in await cursor.to_list(length=limit)]
            log_info("Mongo find_with_pagination", extra={"collection": self.collection.name, "query": str(query), "skip": skip, "limit": limit, "sort": sort, "count": len(result)})
            return result
        except Exception as e:
            log_error("Mongo find_with_pagination failed", extra={"collection": self.collection.name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to paginate documents: Internal DB error")

    async def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        try:
            query = self._prepare_query(query)
            total = await self.collection.count_documents(query)
            log_info("Mongo count", extra={"collection": self.collection.name, "query": str(query), "count": total})
            return total
        except Exception as e:
            log_error("Mongo count failed", extra={"collection": self.collection.name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to count documents: Internal DB error")

    async def find_one_and_update(self, query: Dict[str, Any], update: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Apply ``$set: update`` and return the document as it is after the write."""
        try:
            query = self._prepare_query(query)
            result = await self.collection.find_one_and_update(
                query,
                {"$set": update},
                return_document=ReturnDocument.AFTER
            )
            log_info("Mongo find_one_and_update", extra={"collection": self.collection.name, "query": str(query), "found": bool(result)})
            return self._stringify_id(result)
        except DuplicateKeyError as e:
            raise self._conflict("find_one_and_update", e)
        except Exception as e:
            log_error("Mongo find_one_and_update failed", extra={"collection": self.collection.name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to update document: Internal DB error")

    async def find_one_and_delete(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        try:
            query = self._prepare_query(query)
            result = await self.collection.find_one_and_delete(query)
            log_info("Mongo find_one_and_delete", extra={"collection": self.collection.name, "query": str(query), "deleted": bool(result)})
            return self._stringify_id(result)
        except Exception as e:
            log_error("Mongo find_one_and_delete failed", extra={"collection": self.collection.name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to delete document: Internal DB error")

    async def aggregate(self, pipeline: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
        try:
            cursor = self.collection.aggregate(list(pipeline))
            result = await cursor.to_list(length=None)
            log_info("Mongo aggregate", extra={"collection": self.collection.name, "stages": len(pipeline), "count": len(result)})
            return result
        except Exception as e:
            log_error("Mongo aggregate failed", extra={"collection": self.collection.name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to aggregate documents: Internal DB error")

    async def create_index(self, keys, **kwargs) -> str:
        try:
            name = await self.collection.create_index(keys, **kwargs)
            log_info("Mongo create_index", extra={"collection": self.collection.name, "index": name})
            return name
        except Exception as e:
            log_error("Mongo create_index failed", extra={"collection": self.collection.name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to create index: Internal DB error")

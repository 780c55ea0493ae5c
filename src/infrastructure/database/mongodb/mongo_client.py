# File: infrastructure/database/mongodb/mongo_client.py

from typing import Callable

from fastapi import Depends
from motor.motor_asyncio import AsyncIOMotorDatabase

from .connection import get_mongo_db
from .repository import MongoRepository

PRODUCTS_COLLECTION = "menu"
FAQS_COLLECTION = "faqs"
PAGES_COLLECTION = "pages"
LANGUAGES_COLLECTION = "languages"
MEDIA_COLLECTION = "media"


def get_mongo_collection(collection_name: str) -> Callable[[], MongoRepository]:
    def _get_repo(db: AsyncIOMotorDatabase = Depends(get_mongo_db)) -> MongoRepository:
        return MongoRepository(db, collection_name)
    return _get_repo

# infrastructure/setup/initial_setup.py
from motor.motor_asyncio import AsyncIOMotorDatabase

from common.logging.logger import log_info
from common.utils.date_utils import utc_now
from infrastructure.database.mongodb.mongo_client import (
    FAQS_COLLECTION,
    LANGUAGES_COLLECTION,
    MEDIA_COLLECTION,
    PAGES_COLLECTION,
    PRODUCTS_COLLECTION,
)
from infrastructure.database.mongodb.repository import MongoRepository

DEFAULT_LANGUAGES = [
    {"label": "English", "code": "en", "countryCode": "GB"},
    {"label": "বাংলা", "code": "bn", "countryCode": "BD"},
]


async def ensure_indexes(db: AsyncIOMotorDatabase):
    products = MongoRepository(db, PRODUCTS_COLLECTION)
    await products.create_index("shortId", unique=True)
    await products.create_index([("position", 1), ("_id", 1)])
    await products.create_index("category")
    await products.create_index("tags")

    await MongoRepository(db, FAQS_COLLECTION).create_index("shortId", unique=True, sparse=True)
    await MongoRepository(db, PAGES_COLLECTION).create_index("key", unique=True)
    await MongoRepository(db, LANGUAGES_COLLECTION).create_index("code", unique=True)

    media = MongoRepository(db, MEDIA_COLLECTION)
    await media.create_index("publicId", unique=True)
    await media.create_index("refId")
    log_info("MongoDB indexes ensured", extra={"db": db.name})


async def seed_languages(languages_repo: MongoRepository) -> int:
    """Insert the default languages that are not registered yet; returns how many were added."""
    created = 0
    for language in DEFAULT_LANGUAGES:
        if await languages_repo.find_one({"code": language["code"]}):
            continue
        now = utc_now()
        language_id = await languages_repo.insert_one({**language, "createdAt": now, "updatedAt": now})
        log_info("Default language created", extra={"language_id": language_id, "code": language["code"]})
        created += 1
    return created


async def run_initial_setup(db: AsyncIOMotorDatabase):
    await ensure_indexes(db)
    await seed_languages(MongoRepository(db, LANGUAGES_COLLECTION))

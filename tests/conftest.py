"""Shared fixtures: an in-memory Mongo database and a mocked object-storage client."""

import os

# Settings are read on first import; keep tests off Redis and off the log directory.
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["LOG_TO_FILE"] = "false"
os.environ["ENVIRONMENT"] = "test"

import itertools  # noqa: E402
from unittest.mock import AsyncMock  # noqa: E402

import pytest  # noqa: E402
from mongomock_motor import AsyncMongoMockClient  # noqa: E402

from domain.faq.services.faq_service import FaqService  # noqa: E402
from domain.languages.services.language_service import LanguageService  # noqa: E402
from domain.media.services.media_service import MediaService  # noqa: E402
from domain.pages.services.page_service import PageService  # noqa: E402
from domain.products.services.product_service import ProductService  # noqa: E402
from infrastructure.database.mongodb.repository import MongoRepository  # noqa: E402
from tests.factories import make_upload  # noqa: E402


@pytest.fixture
def db():
    return AsyncMongoMockClient()["mulluk_test"]


@pytest.fixture
def storage():
    """Storage double whose uploads return distinct URLs in call order."""
    counter = itertools.count(1)

    async def upload(*args, **kwargs):
        n = next(counter)
        return make_upload(f"https://cdn.example.com/img-{n}.jpg", f"menu-item-{n:06d}")

    client = AsyncMock()
    client.upload_buffer.side_effect = upload
    client.upload_from_source.side_effect = upload
    client.delete.return_value = None
    return client


@pytest.fixture
def products_repo(db):
    return MongoRepository(db, "menu")


@pytest.fixture
def media_service(db, storage):
    return MediaService(MongoRepository(db, "media"), storage)


@pytest.fixture
def product_service(products_repo, media_service):
    return ProductService(products_repo, media_service)


@pytest.fixture
def faq_service(db):
    return FaqService(MongoRepository(db, "faqs"))


@pytest.fixture
def page_service(db):
    return PageService(MongoRepository(db, "pages"))


@pytest.fixture
def language_service(db):
    return LanguageService(MongoRepository(db, "languages"))

# File: src/api/dependencies.py

from typing import Annotated

from fastapi import Depends

from domain.faq.services.faq_service import FaqService
from domain.languages.services.language_service import LanguageService
from domain.media.services.media_service import MediaService
from domain.pages.services.page_service import PageService
from domain.products.services.product_service import ProductService
from infrastructure.database.mongodb.mongo_client import (
    FAQS_COLLECTION,
    LANGUAGES_COLLECTION,
    MEDIA_COLLECTION,
    PAGES_COLLECTION,
    PRODUCTS_COLLECTION,
    get_mongo_collection,
)
from infrastructure.database.mongodb.repository import MongoRepository
from infrastructure.external.storage.cloudinary_client import CloudinaryClient, get_storage_client


def get_media_service(
    repo: Annotated[MongoRepository, Depends(get_mongo_collection(MEDIA_COLLECTION))],
    storage: Annotated[CloudinaryClient, Depends(get_storage_client)],
) -> MediaService:
    return MediaService(repo, storage)


def get_product_service(
    repo: Annotated[MongoRepository, Depends(get_mongo_collection(PRODUCTS_COLLECTION))],
    languages_repo: Annotated[MongoRepository, Depends(get_mongo_collection(LANGUAGES_COLLECTION))],
    media_service: Annotated[MediaService, Depends(get_media_service)],
) -> ProductService:
    return ProductService(repo, media_service, languages_repo)


def get_faq_service(repo: Annotated[MongoRepository, Depends(get_mongo_collection(FAQS_COLLECTION))]) -> FaqService:
    return FaqService(repo)


def get_page_service(repo: Annotated[MongoRepository, Depends(get_mongo_collection(PAGES_COLLECTION))]) -> PageService:
    return PageService(repo)


def get_language_service(repo: Annotated[MongoRepository, Depends(get_mongo_collection(LANGUAGES_COLLECTION))]) -> LanguageService:
    return LanguageService(repo)


ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
FaqServiceDep = Annotated[FaqService, Depends(get_faq_service)]
PageServiceDep = Annotated[PageService, Depends(get_page_service)]
LanguageServiceDep = Annotated[LanguageService, Depends(get_language_service)]
MediaServiceDep = Annotated[MediaService, Depends(get_media_service)]

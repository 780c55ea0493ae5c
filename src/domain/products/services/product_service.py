# File: domain/products/services/product_service.py

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from common.config.settings import settings
from common.exceptions.base_exception import (
    BadRequestException,
    NotFoundException,
    ServiceUnavailableException,
    UpstreamServiceException,
)
from common.logging.logger import log_info, log_error
from common.translations.messages import get_message
from common.translations.resolver import FALLBACK_LANGUAGE, missing_english
from common.utils.date_utils import utc_now
from common.utils.pagination import page_window, paginate_response
from common.utils.string_utils import unique_preserving_order
from domain.identifiers.short_id import generate_short_id
from domain.media.entities.media_entity import MediaPurpose
from domain.media.services.media_service import MediaService
from domain.products.services.catalog_query import CatalogFilters, CatalogQueryEngine
from domain.products.services.projection import to_card, to_detail
from domain.products.services.stats_service import ProductStatsAggregator
from infrastructure.database.mongodb.repository import MongoRepository

REQUIRED_LOCALIZED_FIELDS = ("title", "description")
LOCALIZED_FIELDS = ("title", "description", "ingredients", "healthBenefit", "origin", "funFact")
DEFAULT_LOGISTICS = {"stock": 0, "isAvailable": True, "grandTotal": 0, "uKey": "c", "calories": 0}


@dataclass
class MediaUpload:
    filename: str
    content: bytes


def _english_required(fields: Sequence[str]) -> BadRequestException:
    names = " and ".join(field[0].upper() + field[1:] for field in fields)
    return BadRequestException(get_message("localization.english_required", variables={"fields": names}))


def _empty_media() -> Dict[str, Any]:
    return {"thumbnail": "", "gallery": []}


class ProductService:
    """
    Catalog operations over the ``menu`` collection.

    Public reads return language-resolved card/detail projections of available
    products; admin reads return raw documents without the availability filter.
    """

    def __init__(
        self,
        repo: MongoRepository,
        media_service: MediaService,
        languages_repo: Optional[MongoRepository] = None,
    ):
        self.repo = repo
        self.media_service = media_service
        self.languages_repo = languages_repo

    async def search_languages(self) -> List[str]:
        """Configured search languages plus every language registered in the store."""
        languages = list(settings.SEARCH_LANGUAGES)
        if self.languages_repo is not None:
            registered = await self.languages_repo.find({})
            languages.extend(doc["code"] for doc in registered if doc.get("code"))
        return unique_preserving_order([FALLBACK_LANGUAGE, *languages])

    # --- CREATE ---

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        missing = missing_english(data, REQUIRED_LOCALIZED_FIELDS)
        if missing:
            raise _english_required(missing)

        position = int(data.get("position") or 0)
        short_id = data.get("shortId") or generate_short_id(data["category"], position, data["title"][FALLBACK_LANGUAGE])
        now = utc_now()

        document = {
            **data,
            "shortId": short_id,
            "position": position,
            "tags": unique_preserving_order(data.get("tags")),
            "logistics": {**DEFAULT_LOGISTICS, **(data.get("logistics") or {})},
            "media": {**_empty_media(), **(data.get("media") or {})},
            "createdAt": now,
            "updatedAt": now,
        }
        await self.repo.insert_one(document)
        log_info("Product created", extra={"product_id": document["_id"], "short_id": short_id})
        return document

    # --- PUBLIC READS ---

    async def get_menu_cards(self, lang: str, page: int = 1, limit: int = 10, category: Optional[str] = None) -> Dict[str, Any]:
        return await self._public_page(lang, CatalogFilters(available=True, category=category), page, limit)

    async def search_products(
        self,
        lang: str,
        q: str,
        category: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        return await self._public_page(lang, CatalogFilters(available=True, category=category, search=q), page, limit)

    async def _public_page(self, lang: str, filters: CatalogFilters, page: int, limit: int) -> Dict[str, Any]:
        page, limit, _ = page_window(page, limit)
        languages = await self.search_languages() if filters.search else [FALLBACK_LANGUAGE]
        engine = CatalogQueryEngine(self.repo, languages)
        items, total = await engine.query(filters, page, limit, transform=lambda doc: to_card(doc, lang))
        return paginate_response(items, total, page, limit)

    async def get_product_detail(self, short_id: str, lang: str) -> Dict[str, Any]:
        product = await self.repo.find_one({"shortId": short_id})
        if not product:
            raise NotFoundException(get_message("product.not_found", lang))
        return to_detail(product, lang)

    # --- ADMIN READS ---

    async def find_all_raw(self, page: int = 1, limit: int = 20, category: Optional[str] = None) -> Dict[str, Any]:
        page, limit, _ = page_window(page, limit)
        engine = CatalogQueryEngine(self.repo, [FALLBACK_LANGUAGE])
        items, total = await engine.query(CatalogFilters(category=category), page, limit)
        return paginate_response(items, total, page, limit)

    async def find_raw(self, product_id: str) -> Dict[str, Any]:
        product = await self.repo.find_one({"_id": product_id})
        if not product:
            raise NotFoundException(get_message("product.not_found"))
        return product

    async def get_product_stats(self) -> Dict[str, Any]:
        stats = await ProductStatsAggregator(self.repo).stats()
        return {**stats, "timestamp": utc_now().isoformat()}

    # --- UPDATE / DELETE ---

    async def update(self, product_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        patch = {key: value for key, value in patch.items() if value is not None}
        current = await self.find_raw(product_id)

        localized = [field for field in LOCALIZED_FIELDS if field in patch]
        missing = missing_english(patch, localized)
        if missing:
            raise _english_required(missing)

        changes = {key: value for key, value in patch.items() if key != "logistics"}
        for key, value in (patch.get("logistics") or {}).items():
            changes[f"logistics.{key}"] = value
        if "tags" in changes:
            changes["tags"] = unique_preserving_order(changes["tags"])

        if "position" in patch and patch["position"] != current.get("position") and not patch.get("shortId"):
            category = patch.get("category", current.get("category"))
            title = patch.get("title") or current.get("title") or {}
            changes["shortId"] = generate_short_id(category, patch["position"], title.get(FALLBACK_LANGUAGE, ""))
        changes.pop("_id", None)
        changes["updatedAt"] = utc_now()

        updated = await self.repo.find_one_and_update({"_id": product_id}, changes)
        if not updated:
            raise NotFoundException(get_message("product.not_found"))
        log_info("Product updated", extra={"product_id": product_id, "fields": sorted(changes)})
        return updated

    async def remove(self, product_id: str) -> Dict[str, bool]:
        deleted = await self.repo.find_one_and_delete({"_id": product_id})
        if not deleted:
            raise NotFoundException(get_message("product.not_found"))
        log_info("Product deleted", extra={"product_id": product_id})
        return {"deleted": True}

    # --- MEDIA ---

    async def upload_media(
        self,
        product_id: str,
        thumbnail: Optional[MediaUpload] = None,
        gallery: Sequence[MediaUpload] = (),
    ) -> Dict[str, Any]:
        """
        Upload the thumbnail and then the gallery files one by one.

        The first storage failure aborts the rest of the batch. Files uploaded
        before it are kept and written to the product in a single update of
        the whole media object; the failure is reported in the result.
        """
        if thumbnail is None and not gallery:
            raise BadRequestException(get_message("product.media.missing"))

        product = await self.find_raw(product_id)
        batch = ([("thumbnail", thumbnail)] if thumbnail is not None else []) + [("gallery", item) for item in gallery]

        new_thumbnail: Optional[str] = None
        new_gallery: List[str] = []
        failed: List[str] = []
        error: Optional[str] = None

        for index, (slot, upload) in enumerate(batch):
            try:
                media = await self.media_service.upload_file(
                    upload.content, upload.filename, MediaPurpose.MENU_ITEM, ref_id=product_id
                )
            except (UpstreamServiceException, ServiceUnavailableException) as e:
                error = str(e.detail)
                failed = [item.filename for _, item in batch[index:]]
                log_error("Product media upload aborted", extra={
                    "product_id": product_id,
                    "failed_file": upload.filename,
                    "aborted": len(failed) - 1,
                    "error": error
                })
                break

            if slot == "thumbnail":
                new_thumbnail = media["url"]
            else:
                new_gallery.append(media["url"])

        uploaded = ([new_thumbnail] if new_thumbnail else []) + new_gallery
        if uploaded:
            current_media = {**_empty_media(), **(product.get("media") or {})}
            media = {
                "thumbnail": new_thumbnail or current_media["thumbnail"],
                "gallery": list(current_media["gallery"]) + new_gallery,
            }
            product = await self.repo.find_one_and_update(
                {"_id": product_id}, {"media": media, "updatedAt": utc_now()}
            ) or product

        log_info("Product media upload finished", extra={"product_id": product_id, "uploaded": len(uploaded), "failed": len(failed)})
        return {"product": product, "uploaded": uploaded, "failed": failed, "error": error}

    async def update_media_order(self, product_id: str, thumbnail: str, gallery: Sequence[str]) -> Dict[str, Any]:
        product = await self.find_raw(product_id)
        current_media = {**_empty_media(), **(product.get("media") or {})}
        known = {url for url in [current_media["thumbnail"], *current_media["gallery"]] if url}

        for url in [thumbnail, *gallery]:
            if url not in known:
                raise BadRequestException(get_message("product.media.unknown_url", variables={"url": url}))

        media = {"thumbnail": thumbnail, "gallery": unique_preserving_order(gallery)}
        updated = await self.repo.find_one_and_update({"_id": product_id}, {"media": media, "updatedAt": utc_now()})
        if not updated:
            raise NotFoundException(get_message("product.not_found"))
        return updated

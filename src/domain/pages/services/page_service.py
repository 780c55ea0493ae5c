# File: domain/pages/services/page_service.py

from typing import Any, Dict, List

from common.exceptions.base_exception import BadRequestException, ConflictException, NotFoundException
from common.logging.logger import log_info
from common.translations.messages import get_message
from common.translations.resolver import missing_english, resolve, resolve_labels, resolve_list
from common.utils.date_utils import utc_now
from infrastructure.database.mongodb.repository import MongoRepository

LOCALIZED_FIELDS = ("title", "description")
BY_KEY = [("key", 1)]


def transform_page(page: Dict[str, Any], lang: str) -> Dict[str, Any]:
    """
    Flatten a page document for one language.

    Custom ``content`` labels are merged last, so a label named like a base
    field overrides it.
    """
    seo = page.get("seo") or {}
    result = {
        "title": resolve(page.get("title"), lang),
        "description": resolve(page.get("description"), lang),
        "link": page.get("link") or "",
        "icon": page.get("icon") or "",
        "video": page.get("videoUrl") or "",
        "seo": {
            "keywords": resolve_list(seo.get("keywords"), lang),
            "ogImage": seo.get("ogImage") or "",
            "isNoIndex": bool(seo.get("isNoIndex", False)),
        },
    }
    result.update(resolve_labels(page.get("content"), lang))
    return result


class PageService:
    def __init__(self, repo: MongoRepository):
        self.repo = repo

    async def get_registry(self, lang: str) -> Dict[str, Dict[str, Any]]:
        pages = await self.repo.find({}, sort=BY_KEY)
        return {page["key"]: transform_page(page, lang) for page in pages if page.get("key")}

    async def find_one_transformed(self, key: str, lang: str) -> Dict[str, Any]:
        page = await self.find_one_raw_by_key(key, lang)
        return {"key": page["key"], **transform_page(page, lang)}

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        missing = missing_english(data, LOCALIZED_FIELDS)
        if missing:
            raise BadRequestException(get_message("localization.english_required", variables={"fields": " and ".join(missing)}))

        if await self.repo.find_one({"key": data["key"]}):
            raise ConflictException(get_message("page.key_exists"))

        now = utc_now()
        document = {"content": {}, **data, "createdAt": now, "updatedAt": now}
        try:
            await self.repo.insert_one(document)
        except ConflictException:
            raise ConflictException(get_message("page.key_exists"))
        log_info("Page created", extra={"page_id": document["_id"], "key": document["key"]})
        return document

    async def update(self, key: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        changes = {field: value for field, value in patch.items() if value is not None}
        # key is the lookup handle and never changes
        changes.pop("key", None)
        changes.pop("_id", None)

        missing = missing_english(changes, [field for field in LOCALIZED_FIELDS if field in changes])
        if missing:
            raise BadRequestException(get_message("localization.english_required", variables={"fields": " and ".join(missing)}))

        changes["updatedAt"] = utc_now()
        updated = await self.repo.find_one_and_update({"key": key}, changes)
        if not updated:
            raise NotFoundException(get_message("page.not_found", variables={"key": key}))
        log_info("Page updated", extra={"key": key, "fields": sorted(changes)})
        return updated

    async def find_all_raw(self) -> List[Dict[str, Any]]:
        return await self.repo.find({}, sort=BY_KEY)

    async def find_one_raw_by_key(self, key: str, lang: str = "en") -> Dict[str, Any]:
        page = await self.repo.find_one({"key": key})
        if not page:
            raise NotFoundException(get_message("page.not_found", lang, {"key": key}))
        return page

    async def remove(self, key: str) -> Dict[str, bool]:
        deleted = await self.repo.find_one_and_delete({"key": key})
        if not deleted:
            raise NotFoundException(get_message("page.not_found", variables={"key": key}))
        log_info("Page deleted", extra={"key": key})
        return {"deleted": True}

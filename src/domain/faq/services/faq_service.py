# File: domain/faq/services/faq_service.py

from typing import Any, Dict, List

from common.exceptions.base_exception import BadRequestException, NotFoundException
from common.logging.logger import log_info
from common.translations.messages import get_message
from common.translations.resolver import missing_english, resolve
from common.utils.date_utils import utc_now
from domain.identifiers.short_id import generate_faq_short_id, legacy_faq_short_id
from infrastructure.database.mongodb.repository import MongoRepository

LOCALIZED_FIELDS = ("question", "answer")
BY_POSITION = [("position", 1), ("_id", 1)]
VISIBLE = {"hide": {"$ne": True}}


def transform_faq(faq: Dict[str, Any], lang: str) -> Dict[str, Any]:
    position = faq.get("position", 0)
    return {
        "_id": str(faq["_id"]),
        "shortId": faq.get("shortId") or legacy_faq_short_id(position),
        "question": resolve(faq.get("question"), lang),
        "answer": resolve(faq.get("answer"), lang),
        "position": position,
        "link": faq.get("link") or "",
        "updatedAt": faq.get("updatedAt"),
    }


class FaqService:
    def __init__(self, repo: MongoRepository):
        self.repo = repo

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        if missing_english(data, LOCALIZED_FIELDS):
            raise BadRequestException(get_message("localization.english_required", variables={"fields": "translation is"}))

        position = data.get("position")
        position = 0 if position is None else int(position)
        now = utc_now()
        document = {
            "hide": False,
            "link": "",
            **data,
            "position": position,
            "shortId": generate_faq_short_id(position),
            "createdAt": now,
            "updatedAt": now,
        }
        await self.repo.insert_one(document)
        log_info("FAQ created", extra={"faq_id": document["_id"], "short_id": document["shortId"]})
        return document

    # --- ADMIN (raw documents) ---

    async def find_all(self) -> List[Dict[str, Any]]:
        return await self.repo.find({}, sort=BY_POSITION)

    async def find_one(self, faq_id: str) -> Dict[str, Any]:
        faq = await self.repo.find_one({"_id": faq_id})
        if not faq:
            raise NotFoundException(get_message("faq.not_found", variables={"ref": f"with ID {faq_id}"}))
        return faq

    async def find_by_short_id(self, short_id: str) -> Dict[str, Any]:
        faq = await self.repo.find_one({"shortId": short_id})
        if not faq:
            raise NotFoundException(get_message("faq.not_found", variables={"ref": f"with shortId {short_id}"}))
        return faq

    # --- PUBLIC (resolved, hidden excluded) ---

    async def find_all_by_lang(self, lang: str) -> List[Dict[str, Any]]:
        faqs = await self.repo.find(dict(VISIBLE), sort=BY_POSITION)
        return [transform_faq(faq, lang) for faq in faqs]

    async def find_one_by_lang(self, faq_id: str, lang: str) -> Dict[str, Any]:
        faq = await self.repo.find_one({"_id": faq_id})
        if not faq or faq.get("hide"):
            raise NotFoundException(get_message("faq.not_found", lang, {"ref": f"with ID {faq_id}"}))
        return transform_faq(faq, lang)

    async def find_one_by_lang_by_short_id(self, lang: str, short_id: str) -> Dict[str, Any]:
        faq = await self.repo.find_one({"shortId": short_id})
        if not faq or faq.get("hide"):
            raise NotFoundException(get_message("faq.not_found", lang, {"ref": f"with shortId {short_id}"}))
        return transform_faq(faq, lang)

    # --- UPDATE / DELETE ---

    async def update(self, faq_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply a partial update.

        A position change issues a brand-new shortId with a fresh random
        suffix, so clients holding the old shortId have to refetch. Any other
        edit leaves the shortId untouched.
        """
        patch = {key: value for key, value in patch.items() if value is not None}
        current = await self.find_one(faq_id)

        if missing_english(patch, [field for field in LOCALIZED_FIELDS if field in patch]):
            raise BadRequestException(get_message("localization.english_required", variables={"fields": "translation is"}))

        changes = dict(patch)
        changes.pop("_id", None)
        changes.pop("shortId", None)
        if "position" in patch and patch["position"] != current.get("position"):
            changes["shortId"] = generate_faq_short_id(patch["position"])
        changes["updatedAt"] = utc_now()

        updated = await self.repo.find_one_and_update({"_id": faq_id}, changes)
        if not updated:
            raise NotFoundException(get_message("faq.not_found", variables={"ref": f"with ID {faq_id}"}))
        log_info("FAQ updated", extra={"faq_id": faq_id, "short_id": updated.get("shortId")})
        return updated

    async def remove(self, faq_id: str) -> Dict[str, bool]:
        deleted = await self.repo.find_one_and_delete({"_id": faq_id})
        if not deleted:
            raise NotFoundException(get_message("faq.not_found", variables={"ref": f"with ID {faq_id}"}))
        log_info("FAQ deleted", extra={"faq_id": faq_id})
        return {"deleted": True}

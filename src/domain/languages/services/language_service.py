# File: domain/languages/services/language_service.py

from typing import Any, Dict, List

from common.exceptions.base_exception import ConflictException, NotFoundException
from common.logging.logger import log_info
from common.translations.messages import get_message
from common.utils.date_utils import utc_now
from infrastructure.database.mongodb.repository import MongoRepository

BY_LABEL = [("label", 1)]


def _normalise(data: Dict[str, Any]) -> Dict[str, Any]:
    normalised = dict(data)
    if normalised.get("code"):
        normalised["code"] = normalised["code"].strip().lower()
    if normalised.get("countryCode"):
        normalised["countryCode"] = normalised["countryCode"].strip().upper()
    return normalised


class LanguageService:
    """Registry of content languages; ``code`` is unique and stored lowercase."""

    def __init__(self, repo: MongoRepository):
        self.repo = repo

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        document = _normalise(data)
        if await self.repo.find_one({"code": document["code"]}):
            raise ConflictException(get_message("language.code_exists"))

        now = utc_now()
        document.update({"createdAt": now, "updatedAt": now})
        try:
            await self.repo.insert_one(document)
        except ConflictException:
            raise ConflictException(get_message("language.code_exists"))
        log_info("Language created", extra={"language_id": document["_id"], "code": document["code"]})
        return document

    async def find_all(self) -> List[Dict[str, Any]]:
        return await self.repo.find({}, sort=BY_LABEL)

    async def find_one(self, language_id: str) -> Dict[str, Any]:
        language = await self.repo.find_one({"_id": language_id})
        if not language:
            raise NotFoundException(get_message("language.not_found"))
        return language

    async def find_by_code(self, code: str) -> Dict[str, Any]:
        language = await self.repo.find_one({"code": code.strip().lower()})
        if not language:
            raise NotFoundException(get_message("language.code_not_found", variables={"code": code}))
        return language

    async def find_by_country(self, country_code: str) -> List[Dict[str, Any]]:
        return await self.repo.find({"countryCode": country_code.strip().upper()}, sort=BY_LABEL)

    async def update(self, language_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        changes = _normalise({key: value for key, value in patch.items() if value is not None})
        changes.pop("_id", None)
        changes["updatedAt"] = utc_now()
        try:
            updated = await self.repo.find_one_and_update({"_id": language_id}, changes)
        except ConflictException:
            raise ConflictException(get_message("language.code_exists"))
        if not updated:
            raise NotFoundException(get_message("language.not_found"))
        log_info("Language updated", extra={"language_id": language_id, "fields": sorted(changes)})
        return updated

    async def remove(self, language_id: str) -> Dict[str, bool]:
        deleted = await self.repo.find_one_and_delete({"_id": language_id})
        if not deleted:
            raise NotFoundException(get_message("language.not_found"))
        log_info("Language deleted", extra={"language_id": language_id, "code": deleted.get("code")})
        return {"deleted": True}

# File: domain/media/services/media_service.py

from typing import Any, Dict, List, Optional

from common.exceptions.base_exception import NotFoundException, ServiceUnavailableException, UpstreamServiceException
from common.logging.logger import log_info, log_error
from common.translations.messages import get_message
from common.utils.date_utils import utc_now
from common.utils.pagination import page_window, paginate_response
from common.utils.string_utils import generate_random_string
from domain.media.entities.media_entity import MediaPurpose
from infrastructure.database.mongodb.repository import MongoRepository
from infrastructure.external.storage.cloudinary_client import CloudinaryClient

NEWEST_FIRST = [("createdAt", -1), ("_id", -1)]


def build_public_id(purpose: MediaPurpose) -> str:
    return f"{MediaPurpose(purpose).value}-{generate_random_string(6)}"


def aspect_ratio(width: int, height: int) -> float:
    return width / height if height > 0 else 0


def _purpose_filter(purpose: Optional[MediaPurpose]) -> Dict[str, Any]:
    return {"purpose": MediaPurpose(purpose).value} if purpose else {}


class MediaService:
    """
    Media records mirror assets held by the object-storage provider.

    ``refId`` is a plain back-reference to the owning entity; removing that
    entity leaves its media records in place.
    """

    def __init__(self, repo: MongoRepository, storage: CloudinaryClient):
        self.repo = repo
        self.storage = storage

    async def _save_metadata(
        self,
        upload: Dict[str, Any],
        name: str,
        purpose: MediaPurpose,
        ref_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        width = upload.get("width") or 0
        height = upload.get("height") or 0
        now = utc_now()
        document = {
            "name": name,
            "url": upload["url"],
            "publicId": upload["public_id"],
            "format": upload.get("format") or "",
            "resourceType": upload.get("resource_type") or "raw",
            "width": width,
            "height": height,
            "aspectRatio": aspect_ratio(width, height),
            "bytes": upload.get("bytes") or 0,
            "purpose": MediaPurpose(purpose).value,
            "refId": ref_id,
            "createdAt": now,
            "updatedAt": now,
        }
        await self.repo.insert_one(document)
        log_info("Media metadata saved", extra={"media_id": document["_id"], "public_id": document["publicId"], "ref_id": ref_id})
        return document

    async def _record_upload(
        self,
        upload: Dict[str, Any],
        name: str,
        purpose: MediaPurpose,
        ref_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Save metadata for an asset that already reached storage.

        If the insert fails the asset is deleted again so storage and the
        media collection stay in step; the insert error is re-raised either way.
        """
        try:
            return await self._save_metadata(upload, name, purpose, ref_id)
        except ServiceUnavailableException:
            public_id = upload["public_id"]
            try:
                await self.storage.delete(public_id, resource_type=upload.get("resource_type") or "image")
            except UpstreamServiceException as e:
                log_error("Media metadata insert failed, asset left orphaned in storage", extra={"public_id": public_id, "ref_id": ref_id, "error": str(e.detail)})
            else:
                log_error("Media metadata insert failed, asset rolled back", extra={"public_id": public_id, "ref_id": ref_id})
            raise

    async def upload_file(
        self,
        content: bytes,
        filename: str,
        purpose: MediaPurpose = MediaPurpose.GENERAL,
        ref_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        public_id = build_public_id(purpose)
        upload = await self.storage.upload_buffer(content, public_id, filename=filename)
        return await self._record_upload(upload, filename, purpose, ref_id)

    async def upload_remote(
        self,
        source: str,
        purpose: MediaPurpose = MediaPurpose.GENERAL,
        name: Optional[str] = None,
        ref_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        public_id = build_public_id(purpose)
        upload = await self.storage.upload_from_source(source, public_id)
        return await self._record_upload(upload, name or f"remote-{public_id}", purpose, ref_id)

    async def find_by_ref_id(self, ref_id: str) -> List[Dict[str, Any]]:
        return await self.repo.find({"refId": ref_id}, sort=NEWEST_FIRST)

    async def find_all(self, page: int = 1, limit: int = 10, purpose: Optional[MediaPurpose] = None) -> Dict[str, Any]:
        query = _purpose_filter(purpose)
        page, limit, skip = page_window(page, limit)
        items = await self.repo.find_with_pagination(query, skip=skip, limit=limit, sort=NEWEST_FIRST)
        total = await self.repo.count(query)
        return paginate_response(items, total, page, limit)

    async def find_all_raw(self, purpose: Optional[MediaPurpose] = None) -> List[Dict[str, Any]]:
        return await self.repo.find(_purpose_filter(purpose), sort=NEWEST_FIRST)

    async def get_count(self, purpose: Optional[MediaPurpose] = None) -> Dict[str, Any]:
        count = await self.repo.count(_purpose_filter(purpose))
        return {"count": count, "purpose": MediaPurpose(purpose).value if purpose else "all"}

    async def find_by_id(self, media_id: str) -> Dict[str, Any]:
        media = await self.repo.find_one({"_id": media_id})
        if not media:
            raise NotFoundException(get_message("media.not_found"))
        return media

    async def delete(self, media_id: str) -> Dict[str, Any]:
        media = await self.find_by_id(media_id)
        await self.storage.delete(media["publicId"], resource_type=media.get("resourceType") or "image")
        deleted = await self.repo.find_one_and_delete({"_id": media_id})
        if not deleted:
            raise NotFoundException(get_message("media.not_found"))
        log_info("Media deleted", extra={"media_id": media_id, "public_id": media["publicId"]})
        return deleted

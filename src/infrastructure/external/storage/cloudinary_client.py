# File: infrastructure/external/storage/cloudinary_client.py

import asyncio
import io
from typing import Any, Callable, Dict, Optional

import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from common.config.settings import settings
from common.exceptions.base_exception import UpstreamServiceException
from common.logging.logger import log_info, log_error, log_warning

SERVICE_NAME = "Cloudinary"


class CloudinaryClient:
    """
    Uploads and deletes through the Cloudinary SDK.

    The SDK is blocking, so every call runs in a worker thread. Any failure it
    raises, including unparseable gateway responses, surfaces as
    ``UpstreamServiceException``. Every successful upload is normalised to
    ``{url, public_id, width, height, bytes, format, resource_type}``.
    """

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        folder: Optional[str] = None,
        timeout: Optional[float] = None,
        api_prefix: Optional[str] = None,
    ):
        self.cloud_name = cloud_name or settings.CLOUDINARY_CLOUD_NAME
        self.api_key = api_key or settings.CLOUDINARY_API_KEY
        self.api_secret = api_secret or settings.CLOUDINARY_API_SECRET
        self.folder = settings.CLOUDINARY_FOLDER if folder is None else folder
        self.timeout = timeout or settings.CLOUDINARY_TIMEOUT
        self.api_prefix = api_prefix

    def _options(self, **extra: Any) -> Dict[str, Any]:
        options = {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "timeout": self.timeout,
        }
        if self.api_prefix:
            options["upload_prefix"] = self.api_prefix
        options.update({key: value for key, value in extra.items() if value not in (None, "")})
        return options

    async def _call(self, action: Callable[..., Dict[str, Any]], target: Any, options: Dict[str, Any], context: Dict[str, Any]) -> Dict[str, Any]:
        try:
            result = await asyncio.to_thread(action, target, **options)
        except CloudinaryError as e:
            log_error("Cloudinary request rejected", extra={**context, "error": str(e)})
            raise UpstreamServiceException(SERVICE_NAME, str(e) or "Request failed")
        except Exception as e:
            log_error("Cloudinary request failed", extra={**context, "error": str(e)}, exc_info=True)
            raise UpstreamServiceException(SERVICE_NAME, str(e) or "Request failed")

        if not isinstance(result, dict):
            log_error("Cloudinary returned an unexpected payload", extra={**context, "payload_type": type(result).__name__})
            raise UpstreamServiceException(SERVICE_NAME, "Unexpected response")
        return result

    @staticmethod
    def _normalise(payload: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "url": payload.get("secure_url") or payload.get("url", ""),
            "public_id": payload.get("public_id", ""),
            "width": payload.get("width") or 0,
            "height": payload.get("height") or 0,
            "bytes": payload.get("bytes") or 0,
            "format": payload.get("format") or "",
            "resource_type": payload.get("resource_type") or "raw",
        }

    async def upload_buffer(self, content: bytes, public_id: str, filename: str = "upload") -> Dict[str, Any]:
        options = self._options(folder=self.folder, public_id=public_id, resource_type="auto", filename=filename)
        payload = await self._call(cloudinary.uploader.upload, io.BytesIO(content), options, {"public_id": public_id, "source": "buffer"})
        log_info("Cloudinary buffer uploaded", extra={"public_id": payload.get("public_id"), "bytes": payload.get("bytes")})
        return self._normalise(payload)

    async def upload_from_source(self, source: str, public_id: str) -> Dict[str, Any]:
        """Upload from a remote URL or a base64 data URI."""
        options = self._options(folder=self.folder, public_id=public_id, resource_type="auto")
        payload = await self._call(cloudinary.uploader.upload, source, options, {"public_id": public_id, "source": "remote"})
        log_info("Cloudinary remote uploaded", extra={"public_id": payload.get("public_id"), "bytes": payload.get("bytes")})
        return self._normalise(payload)

    async def delete(self, public_id: str, resource_type: str = "image") -> None:
        options = self._options(resource_type=resource_type, invalidate=True)
        payload = await self._call(cloudinary.uploader.destroy, public_id, options, {"public_id": public_id, "action": "destroy"})
        if payload.get("result") != "ok":
            log_warning("Cloudinary destroy returned no deletion", extra={"public_id": public_id, "result": payload.get("result")})
            return
        log_info("Cloudinary asset deleted", extra={"public_id": public_id})


_storage_client: Optional[CloudinaryClient] = None


def get_storage_client() -> CloudinaryClient:
    """Dependency returning the shared storage client."""
    global _storage_client
    if _storage_client is None:
        _storage_client = CloudinaryClient()
    return _storage_client

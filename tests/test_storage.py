"""Tests for the Cloudinary client against a local stand-in for the Cloudinary API."""

import asyncio
from typing import List, Tuple

import pytest
from aiohttp import web
from aiohttp import test_utils

from common.exceptions.base_exception import UpstreamServiceException
from domain.media.services.media_service import MediaService
from domain.products.services.product_service import MediaUpload, ProductService
from infrastructure.database.mongodb.repository import MongoRepository
from infrastructure.external.storage.cloudinary_client import CloudinaryClient
from tests.factories import product_payload

GATEWAY_ERROR_PAGE = "<html><body><h1>502 Bad Gateway</h1></body></html>"


def upload_body(url: str, public_id: str) -> dict:
    return {
        "secure_url": url,
        "url": url.replace("https://", "http://"),
        "public_id": public_id,
        "width": 640,
        "height": 480,
        "bytes": 2048,
        "format": "jpg",
        "resource_type": "image",
    }


class FakeCloudinary:
    """Replays queued responses and records every request it receives."""

    def __init__(self):
        self.responses: List[web.Response] = []
        self.requests: List[Tuple[str, dict]] = []
        self.delay = 0.0
        self.server = None

    async def handle(self, request: web.Request) -> web.Response:
        form = await request.post()
        self.requests.append((request.path, {key: value for key, value in form.items() if isinstance(value, str)}))
        if self.delay:
            await asyncio.sleep(self.delay)
        return self.responses.pop(0)

    def reply_json(self, body: dict, status: int = 200) -> None:
        self.responses.append(web.json_response(body, status=status))

    def reply_html(self, status: int = 502) -> None:
        self.responses.append(web.Response(status=status, text=GATEWAY_ERROR_PAGE, content_type="text/html"))

    @property
    def prefix(self) -> str:
        return f"http://{self.server.host}:{self.server.port}"

    def client(self, timeout: float = 5) -> CloudinaryClient:
        return CloudinaryClient(
            cloud_name="demo", api_key="key", api_secret="secret", folder="moger_mulluk", timeout=timeout, api_prefix=self.prefix
        )


@pytest.fixture
async def cloudinary_api():
    fake = FakeCloudinary()
    app = web.Application()
    app.router.add_post("/v1_1/{cloud_name}/{resource_type}/{action}", fake.handle)
    fake.server = test_utils.TestServer(app)
    await fake.server.start_server()
    yield fake
    await fake.server.close()


class TestCloudinaryClient:
    async def test_upload_buffer_is_normalised(self, cloudinary_api) -> None:
        cloudinary_api.reply_json(upload_body("https://cdn.example.com/one.jpg", "moger_mulluk/menu-item-abc123"))

        result = await cloudinary_api.client().upload_buffer(b"jpeg-bytes", "menu-item-abc123", filename="one.jpg")

        assert result == {
            "url": "https://cdn.example.com/one.jpg",
            "public_id": "moger_mulluk/menu-item-abc123",
            "width": 640,
            "height": 480,
            "bytes": 2048,
            "format": "jpg",
            "resource_type": "image",
        }
        path, fields = cloudinary_api.requests[0]
        assert path == "/v1_1/demo/auto/upload"
        assert fields["public_id"] == "menu-item-abc123"
        assert fields["folder"] == "moger_mulluk"
        assert fields["api_key"] == "key"
        assert "signature" in fields

    async def test_upload_from_source_sends_the_url(self, cloudinary_api) -> None:
        cloudinary_api.reply_json(upload_body("https://cdn.example.com/remote.png", "general-xyz789"))

        result = await cloudinary_api.client().upload_from_source("https://example.com/a.png", "general-xyz789")

        assert result["url"] == "https://cdn.example.com/remote.png"
        assert cloudinary_api.requests[0][1]["file"] == "https://example.com/a.png"

    async def test_rejected_upload_carries_provider_message(self, cloudinary_api) -> None:
        cloudinary_api.reply_json({"error": {"message": "Invalid image file"}}, status=400)

        with pytest.raises(UpstreamServiceException) as excinfo:
            await cloudinary_api.client().upload_buffer(b"not-an-image", "menu-item-bad001")

        assert excinfo.value.status_code == 502
        assert "Invalid image file" in excinfo.value.detail

    async def test_gateway_html_page_is_an_upstream_error(self, cloudinary_api) -> None:
        cloudinary_api.reply_html(502)

        with pytest.raises(UpstreamServiceException) as excinfo:
            await cloudinary_api.client().upload_buffer(b"x", "menu-item-gw0001")

        assert excinfo.value.detail.startswith("Cloudinary: ")

    async def test_timeout_is_an_upstream_error(self, cloudinary_api) -> None:
        cloudinary_api.delay = 1.5
        cloudinary_api.reply_json(upload_body("https://cdn.example.com/late.jpg", "menu-item-late01"))

        with pytest.raises(UpstreamServiceException):
            await cloudinary_api.client(timeout=0.3).upload_buffer(b"x", "menu-item-late01")

    async def test_unreachable_host_is_an_upstream_error(self) -> None:
        client = CloudinaryClient(cloud_name="demo", api_key="key", api_secret="secret", timeout=1, api_prefix="http://127.0.0.1:1")

        with pytest.raises(UpstreamServiceException):
            await client.upload_from_source("https://example.com/a.png", "general-down01")

    async def test_delete(self, cloudinary_api) -> None:
        cloudinary_api.reply_json({"result": "ok"})
        cloudinary_api.reply_json({"result": "not found"})
        client = cloudinary_api.client()

        await client.delete("menu-item-abc123")
        await client.delete("menu-item-gone00", resource_type="video")

        assert [path for path, _ in cloudinary_api.requests] == ["/v1_1/demo/image/destroy", "/v1_1/demo/video/destroy"]
        assert cloudinary_api.requests[0][1]["public_id"] == "menu-item-abc123"


class TestProductUploadAgainstStorage:
    async def test_gateway_error_mid_batch_keeps_earlier_uploads(self, db, cloudinary_api) -> None:
        media_service = MediaService(MongoRepository(db, "media"), cloudinary_api.client())
        product_service = ProductService(MongoRepository(db, "menu"), media_service)
        product = await product_service.create(product_payload())
        cloudinary_api.reply_json(upload_body("https://cdn.example.com/one.jpg", "menu-item-000001"))
        cloudinary_api.reply_html(502)

        result = await product_service.upload_media(
            product["_id"],
            gallery=[MediaUpload("1.jpg", b"1"), MediaUpload("2.jpg", b"2"), MediaUpload("3.jpg", b"3")],
        )

        assert result["uploaded"] == ["https://cdn.example.com/one.jpg"]
        assert result["failed"] == ["2.jpg", "3.jpg"]
        assert result["error"].startswith("Cloudinary: ")
        stored = await product_service.find_raw(product["_id"])
        assert stored["media"]["gallery"] == ["https://cdn.example.com/one.jpg"]
        assert len(await media_service.find_by_ref_id(product["_id"])) == 1
        assert len(cloudinary_api.requests) == 2
